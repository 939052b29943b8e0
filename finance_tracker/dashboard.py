"""
Finance Tracker Dashboard

A Streamlit web interface for reviewing imported transactions and the
income captured during onboarding.

Run with: streamlit run finance_tracker/dashboard.py
"""
import streamlit as st
import pandas as pd
import plotly.express as px
from datetime import datetime

from finance_tracker.core.category_enhancer import IGNORE_CATEGORY_ID, create_ignore_category
from finance_tracker.core.category_matcher import confidence_label, rank_categories
from finance_tracker.core.currency import format_currency
from finance_tracker.core.income_aggregator import (
    analyze_income_distribution,
    convert_to_yearly,
    format_income_insights,
    validate_all_income_sources,
)
from finance_tracker.core.merchant_normalizer import is_split_worthy, normalize_merchant_name
from finance_tracker.core.transaction_splitter import SplitItem, auto_distribute, split_transaction
from finance_tracker.data_manager import DataManager


# Page config
st.set_page_config(
    page_title="Finance Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #1f77b4;
        margin-bottom: 1rem;
    }
    .stTabs [data-baseweb="tab-list"] {
        gap: 2rem;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_manager():
    """One DataManager per server process"""
    return DataManager()


def transactions_to_frame(transactions):
    """Flatten Transaction records into a DataFrame for charts and tables"""
    rows = []
    for txn in transactions:
        rows.append({
            'id': txn.id,
            'date': pd.to_datetime(txn.date) if txn.date else pd.NaT,
            'description': txn.description,
            'merchant': normalize_merchant_name(txn.description),
            'amount': float(txn.amount),
            'category': txn.category.name if txn.category else 'Uncategorized',
            'category_id': txn.category.id if txn.category else None,
            'confidence': txn.confidence,
            'needs_review': txn.needs_review,
            'sample': txn.sample,
        })

    df = pd.DataFrame(rows, columns=[
        'id', 'date', 'description', 'merchant', 'amount', 'category',
        'category_id', 'confidence', 'needs_review', 'sample',
    ])
    df['type'] = df['amount'].apply(lambda x: 'Income' if x > 0 else 'Expense')
    df['year_month'] = df['date'].dt.strftime('%Y-%m')
    return df


def render_overview(df):
    """Render overview dashboard"""
    st.markdown('<p class="main-header">💰 Overview</p>', unsafe_allow_html=True)

    # Ignored payments and transfers are not spending
    counted = df[df['category_id'] != IGNORE_CATEGORY_ID]
    expenses = -counted[counted['amount'] < 0]['amount'].sum()
    income = counted[counted['amount'] > 0]['amount'].sum()

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Total Expenses", f"${expenses:,.2f}")
    with col2:
        st.metric("Total Income", f"${income:,.2f}")
    with col3:
        st.metric("Net", f"${income - expenses:,.2f}")

    st.divider()

    spending = counted[counted['amount'] < 0].copy()
    if spending.empty:
        st.info("No expenses yet.")
        return
    spending['spent'] = -spending['amount']

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("📊 Spending by Category")
        category_totals = spending.groupby('category')['spent'].sum().reset_index()
        category_totals = category_totals.sort_values('spent', ascending=False).head(10)

        fig = px.pie(
            category_totals,
            values='spent',
            names='category',
            title='Top 10 Categories',
            hole=0.4
        )
        fig.update_traces(textposition='inside', textinfo='percent+label')
        st.plotly_chart(fig, use_container_width=True)

    with col2:
        st.subheader("📅 Monthly Spending Trend")
        monthly = spending.groupby('year_month')['spent'].sum().reset_index().sort_values('year_month')

        fig = px.line(
            monthly,
            x='year_month',
            y='spent',
            title='Monthly Expenses Over Time',
            labels={'year_month': 'Month', 'spent': 'Total Expenses ($)'},
            markers=True
        )
        fig.update_layout(hovermode='x unified')
        st.plotly_chart(fig, use_container_width=True)


def render_transactions(df):
    """Render transaction list with filters"""
    st.markdown('<p class="main-header">📝 Transactions</p>', unsafe_allow_html=True)

    col1, col2, col3 = st.columns(3)

    with col1:
        categories = ['All'] + sorted(df['category'].unique().tolist())
        selected_category = st.selectbox('Category', categories, key='txn_category')

    with col2:
        selected_review = st.selectbox('Status', ['All', 'Needs Review', 'Categorized'], key='txn_status')

    with col3:
        search = st.text_input('Search merchant', '', key='txn_search')

    filtered_df = df.copy()

    if selected_category != 'All':
        filtered_df = filtered_df[filtered_df['category'] == selected_category]

    if selected_review == 'Needs Review':
        filtered_df = filtered_df[filtered_df['needs_review']]
    elif selected_review == 'Categorized':
        filtered_df = filtered_df[~filtered_df['needs_review']]

    if search:
        needle = normalize_merchant_name(search)
        filtered_df = filtered_df[filtered_df['merchant'].str.contains(needle, regex=False)]

    st.info(f"Showing {len(filtered_df):,} transactions")

    display_df = filtered_df[['date', 'merchant', 'amount', 'category', 'confidence', 'needs_review']].copy()
    display_df['date'] = display_df['date'].dt.strftime('%Y-%m-%d')
    display_df['amount'] = display_df['amount'].apply(format_currency)
    display_df['confidence'] = display_df['confidence'].apply(confidence_label)
    display_df = display_df.rename(columns={
        'date': 'Date',
        'merchant': 'Merchant',
        'amount': 'Amount',
        'category': 'Category',
        'confidence': 'Confidence',
        'needs_review': 'Needs Review'
    })

    st.dataframe(display_df, use_container_width=True, height=600, hide_index=True)

    csv = filtered_df.to_csv(index=False)
    st.download_button(
        label="📥 Download as CSV",
        data=csv,
        file_name=f"transactions_{datetime.now().strftime('%Y%m%d')}.csv",
        mime="text/csv"
    )


def render_split_form(manager, txn, categories):
    """Split one transaction into equal parts under chosen categories"""
    with st.expander("✂️ Split this transaction"):
        count = st.number_input("Parts", min_value=2, max_value=10, value=2, key=f"split_n_{txn.id}")
        amounts = auto_distribute(txn.amount, int(count))

        items = []
        for index, amount in enumerate(amounts, start=1):
            col1, col2 = st.columns(2)
            with col1:
                st.write(f"Item {index}: {format_currency(amount)}")
            with col2:
                category = st.selectbox(
                    "Category",
                    categories,
                    format_func=lambda c: c.name,
                    key=f"split_cat_{txn.id}_{index}"
                )
            items.append(SplitItem(amount=amount, category=category))

        if st.button("Split", key=f"split_{txn.id}"):
            try:
                children = split_transaction(txn, items)
            except ValueError as e:
                st.error(str(e))
                return
            manager.replace_with_split(txn.id, children)
            st.success(f"Split into {len(children)} transactions")
            st.rerun()


def render_review_queue(manager):
    """Review and categorize transactions that need attention"""
    st.header("📋 Transaction Review Queue")

    categories = manager.load_categories() + [create_ignore_category()]
    queue = [t for t in manager.load_transactions() if t.needs_review]

    if not queue:
        st.success("🎉 All transactions reviewed! Nothing needs your attention.")
        return

    st.metric("Transactions to Review", len(queue))
    st.markdown("---")

    for txn in queue[:25]:
        st.markdown(f"**{txn.description}** · {format_currency(txn.amount)} · {txn.date}")

        suggestions = rank_categories(txn, categories)
        if suggestions:
            st.caption("Suggested: " + ", ".join(
                f"{s.category.name} ({confidence_label(s.confidence)})" for s in suggestions))

        default_index = 0
        if txn.category is not None:
            ids = [c.id for c in categories]
            default_index = ids.index(txn.category.id) if txn.category.id in ids else 0

        col1, col2 = st.columns([3, 1])
        with col1:
            selected = st.selectbox(
                "Category",
                categories,
                index=default_index,
                format_func=lambda c: c.name,
                key=f"cat_{txn.id}"
            )
        with col2:
            if st.button("✅ Confirm", key=f"confirm_{txn.id}"):
                manager.assign_category(txn.id, selected.id)
                st.rerun()

        if is_split_worthy(txn):
            render_split_form(manager, txn, categories)

        st.markdown("---")


def render_income(manager):
    """Income sources, distribution and advice"""
    st.markdown('<p class="main-header">📈 Income</p>', unsafe_allow_html=True)

    sources = ((manager.load_user_data() or {}).get('income') or {}).get('incomeSources') or []
    if not sources:
        st.info("No income sources saved yet.")
        return

    for error in validate_all_income_sources(sources):
        st.warning(error)

    distribution = analyze_income_distribution(sources)
    if distribution is None:
        st.info("Total yearly income is $0.00")
        return

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Yearly Income", format_currency(distribution.total_yearly))
    with col2:
        st.metric("Monthly Average", format_currency(distribution.monthly_average))
    with col3:
        st.metric("Sources", distribution.total_sources)

    insights = format_income_insights(distribution)
    st.write(insights['primary_text'])
    for message in insights['messages']:
        if message['type'] == 'success':
            st.success(message['text'])
        else:
            st.warning(message['text'])

    yearly = pd.DataFrame([
        {'source': s.get('name'), 'yearly': float(convert_to_yearly(s.get('amount'), s.get('frequency')))}
        for s in sources
    ])
    fig = px.pie(yearly, values='yearly', names='source', title='Yearly Income by Source', hole=0.4)
    st.plotly_chart(fig, use_container_width=True)


def main():
    """Main dashboard app"""
    manager = get_manager()

    with st.sidebar:
        st.title("💰 Finance Tracker")
        st.divider()

        if st.button("🧪 Load sample transactions"):
            added = manager.seed_sample_transactions()
            st.success(f"Added {added} sample transactions")
        if st.button("🧹 Clear sample transactions"):
            removed = manager.clear_sample_transactions()
            st.success(f"Removed {removed} sample transactions")

        st.divider()
        if st.button("🔄 Refresh Data"):
            st.rerun()

    try:
        df = transactions_to_frame(manager.load_transactions())

        tabs = st.tabs(["📊 Overview", "📝 Transactions", "📋 Review Queue", "📈 Income"])

        with tabs[0]:
            if df.empty:
                st.warning("No transactions yet. Import a CSV with finance-import.")
            else:
                render_overview(df)

        with tabs[1]:
            if not df.empty:
                render_transactions(df)

        with tabs[2]:
            render_review_queue(manager)

        with tabs[3]:
            render_income(manager)

    except Exception as e:
        st.error(f"Error loading data: {e}")
        st.exception(e)


if __name__ == "__main__":
    main()
