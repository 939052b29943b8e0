"""
Finance Tracker - Setup Configuration
"""
from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="finance-tracker",
    version="1.0.0",
    author="Andrew",
    description="Personal finance tracker with merchant-based categorization and income analysis",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "psycopg2-binary>=2.9.9",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "pytest-cov>=4.1.0",
            "black>=23.12.1",
            "flake8>=7.0.0",
            "mypy>=1.8.0",
        ],
        "ui": [
            "streamlit>=1.29.0",
            "pandas>=2.1.4",
            "plotly>=5.18.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "finance-init-db=finance_tracker.cli.init_db:main",
            "finance-import=finance_tracker.cli.import_csv:main",
            "finance-income=finance_tracker.cli.income_report:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Office/Business :: Financial",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
