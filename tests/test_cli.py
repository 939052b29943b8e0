"""
Tests for the command line entry points
"""
import json

import pytest

from finance_tracker.cli import import_csv, income_report
from finance_tracker.data_manager import DataManager, JsonFileStorage

BANK_CSV = """Posting Date,Description,Amount
01/30/2025,WHOLE FOODS MARKET #10234,-86.42
01/28/2025,PAYMENT THANK YOU - WEB,-500.00
01/03/2025,PAYROLL DIRECT DEPOSIT ACME CORP,3200.00
"""


@pytest.fixture
def bank_csv(tmp_path):
    path = tmp_path / 'bank.csv'
    path.write_text(BANK_CSV, encoding='utf-8')
    return path


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / 'data'


class TestImportCsv:
    def test_import_saves_transactions(self, bank_csv, data_dir, capsys):
        import_csv.main([str(bank_csv), '--backend', 'json', '--data-dir', str(data_dir)])

        out = capsys.readouterr().out
        assert 'Inserted: 3' in out
        assert 'Import complete!' in out

        transactions = DataManager(JsonFileStorage(data_dir)).load_transactions()
        assert len(transactions) == 3
        assert transactions[1].category.id == 'system-ignore'

    def test_reimport_skips_duplicates(self, bank_csv, data_dir, capsys):
        args = [str(bank_csv), '--backend', 'json', '--data-dir', str(data_dir)]
        import_csv.main(args)
        import_csv.main(args)

        assert 'Skipped (duplicates): 3' in capsys.readouterr().out
        assert len(DataManager(JsonFileStorage(data_dir)).load_transactions()) == 3

    def test_dry_run_saves_nothing(self, bank_csv, data_dir, capsys):
        import_csv.main([str(bank_csv), '--dry-run', '--backend', 'json', '--data-dir', str(data_dir)])

        assert 'DRY RUN' in capsys.readouterr().out
        assert DataManager(JsonFileStorage(data_dir)).load_transactions() == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            import_csv.main([str(tmp_path / 'nope.csv')])
        assert exc.value.code == 1

    def test_partial_column_mapping(self, bank_csv):
        with pytest.raises(SystemExit):
            import_csv.main([str(bank_csv), '--date-column', 'Posting Date'])

    def test_unparseable_file_exits(self, tmp_path, data_dir):
        path = tmp_path / 'bad.csv'
        path.write_text("Foo,Bar\n1,2\n", encoding='utf-8')
        with pytest.raises(SystemExit):
            import_csv.main([str(path), '--backend', 'json', '--data-dir', str(data_dir)])


class TestIncomeReport:
    def test_report_from_profile_file(self, tmp_path, capsys):
        path = tmp_path / 'profile.json'
        path.write_text(json.dumps({
            'income': {'incomeSources': [
                {'name': 'Job', 'amount': 5000, 'frequency': 'Monthly'},
                {'name': 'Side', 'amount': 500, 'frequency': 'Monthly'},
            ]},
        }), encoding='utf-8')

        income_report.main(['--profile', str(path)])

        out = capsys.readouterr().out
        assert 'Total yearly: $66,000.00' in out
        assert 'Primary income source: Job (91% of total)' in out
        assert 'left to allocate' in out

    def test_report_lists_problems(self, tmp_path, capsys):
        path = tmp_path / 'profile.json'
        path.write_text(json.dumps({
            'income': {'incomeSources': [{'name': '', 'amount': 100, 'frequency': 'Daily'}]},
        }), encoding='utf-8')

        income_report.main(['--profile', str(path)])

        out = capsys.readouterr().out
        assert 'Income source 1: Income source name is required' in out
        assert 'Income source 1: Valid frequency is required' in out

    def test_report_from_storage(self, data_dir, capsys):
        income_report.main(['--backend', 'json', '--data-dir', str(data_dir)])
        assert 'No income sources saved yet' in capsys.readouterr().out

    def test_unreadable_profile(self, tmp_path):
        with pytest.raises(SystemExit):
            income_report.main(['--profile', str(tmp_path / 'missing.json')])
