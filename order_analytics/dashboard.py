"""
Order Analytics Dashboard

A Streamlit web interface for visualizing Amazon purchase history.

Run with: streamlit run order_analytics/dashboard.py
"""
import streamlit as st
import plotly.express as px

from order_analytics.charts import (
    averages_frame,
    category_frame,
    histogram_frame,
    monthly_frame,
    purchases_frame,
    yearly_category_frame,
)
from order_analytics.core.aggregator import aggregate
from order_analytics.core.categorizer import ProductCategorizer
from order_analytics.core.order_loader import ORDER_DATE, RECORD_FIELDS, read_order_history
from order_analytics.core.purchases import (
    CATEGORY_COLORS,
    PAGE_SIZE_OPTIONS,
    category_averages,
    paginate,
    search_purchases,
    sort_purchases,
)
from order_analytics.core.taxonomy import DEFAULT_TAXONOMY, load_taxonomy_from_file
from order_analytics.utils.config import get_settings
from order_analytics.utils.exceptions import OrderAnalyticsError


# Page config
st.set_page_config(
    page_title="Amazon Purchase Analysis",
    page_icon="📦",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_data(ttl=300)  # Cache for 5 minutes
def load_records(csv_path):
    """Load order records from the CSV export"""
    return read_order_history(csv_path)


@st.cache_resource
def load_categorizer(taxonomy_path):
    if taxonomy_path:
        return ProductCategorizer(load_taxonomy_from_file(taxonomy_path))
    return ProductCategorizer(DEFAULT_TAXONOMY)


def render_dashboard(records, categorizer):
    """Render analytics charts"""
    summary = aggregate(records, categorizer)

    st.header("📦 Amazon Purchase Analysis")
    st.metric("Total Spent", f"${summary.total_spent:,.2f}")

    st.divider()

    col1, col2 = st.columns([7, 5])

    with col1:
        st.subheader("📅 Monthly Spending")
        fig = px.line(
            monthly_frame(summary),
            x='month',
            y='amount',
            labels={'month': 'Month', 'amount': 'Amount ($)'},
            markers=True
        )
        fig.update_layout(hovermode='x unified')
        st.plotly_chart(fig, use_container_width=True)

    with col2:
        st.subheader("🏷️ Spending by Category")
        categories = category_frame(summary)
        fig = px.pie(
            categories,
            values='amount',
            names='label',
            color='category',
            color_discrete_map=CATEGORY_COLORS,
        )
        st.plotly_chart(fig, use_container_width=True)

    st.subheader("📆 Yearly Spending by Category")
    fig = px.bar(
        yearly_category_frame(summary),
        x='year',
        y='amount',
        color='category',
        color_discrete_map=CATEGORY_COLORS,
        labels={'year': 'Year', 'amount': 'Amount ($)', 'category': 'Category'},
    )
    fig.update_layout(barmode='stack')
    st.plotly_chart(fig, use_container_width=True)

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("📊 Purchase Amount Distribution")
        fig = px.bar(
            histogram_frame(summary),
            x='bucket',
            y='count',
            labels={'bucket': 'Amount', 'count': 'Number of Purchases'},
        )
        st.plotly_chart(fig, use_container_width=True)

    with col2:
        st.subheader("💵 Average Purchase Amount by Category")
        fig = px.bar(
            averages_frame(category_averages(records, categorizer)),
            x='category',
            y='average',
            color='category',
            color_discrete_map=CATEGORY_COLORS,
            labels={'category': 'Category', 'average': 'Average Amount ($)'},
        )
        fig.update_layout(showlegend=False)
        st.plotly_chart(fig, use_container_width=True)


def render_purchases(records):
    """Render the purchase table with search, sort and paging"""
    st.header("📝 Purchase History")

    col1, col2, col3, col4 = st.columns([4, 2, 1, 1])

    with col1:
        search = st.text_input('Search Products', '', key='purchase_search')

    with col2:
        sort_column = st.selectbox('Sort by', RECORD_FIELDS, index=RECORD_FIELDS.index(ORDER_DATE),
                                   key='purchase_sort')

    with col3:
        descending = st.selectbox('Order', ['desc', 'asc'], key='purchase_order') == 'desc'

    with col4:
        page_size = st.selectbox('Rows', PAGE_SIZE_OPTIONS, index=1, key='purchase_rows')

    rows = sort_purchases(search_purchases(records, search), sort_column, descending)
    _, total_pages = paginate(rows, 0, page_size)
    page = st.number_input('Page', min_value=1, max_value=max(total_pages, 1), value=1, step=1,
                           key='purchase_page')

    page_rows, _ = paginate(rows, int(page) - 1, page_size)

    st.info(f"Showing {len(page_rows):,} of {len(rows):,} purchases")
    st.dataframe(purchases_frame(page_rows), use_container_width=True, hide_index=True)


def main():
    """Main dashboard"""
    settings = get_settings()

    with st.sidebar:
        st.subheader("📁 Data")
        csv_path = st.text_input("Order history CSV", str(settings.order_history_csv))
        taxonomy_path = st.text_input(
            "Taxonomy JSON (optional)",
            str(settings.taxonomy_file) if settings.taxonomy_file else ''
        )

        if st.button("🔄 Refresh Data"):
            st.cache_data.clear()
            st.rerun()

    try:
        with st.spinner("Loading purchases..."):
            records = load_records(csv_path)
            categorizer = load_categorizer(taxonomy_path or None)
    except OrderAnalyticsError as e:
        st.error(f"Error loading data: {e}")
        st.markdown(
            "Please ensure the order history CSV exists and includes the "
            "`Order Date`, `Product Name` and `Total Owed` columns."
        )
        return

    if not records:
        st.warning("No purchases found in the order history.")
        return

    tabs = st.tabs(["📊 Dashboard", "📝 Purchase History"])

    with tabs[0]:
        render_dashboard(records, categorizer)

    with tabs[1]:
        render_purchases(records)


if __name__ == "__main__":
    main()
