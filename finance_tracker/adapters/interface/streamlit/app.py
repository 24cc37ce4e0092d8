"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date, datetime, time
from decimal import Decimal

import streamlit as st
import altair as alt

from finance_tracker.application.ports.user_repository import (
    UserRepositoryPort,
)
from finance_tracker.application.use_cases.authentication import (
    AuthService,
    Session,
)
from finance_tracker.application.use_cases.finance_operations import (
    FinanceService,
)
from finance_tracker.application.use_cases.results import attempt
from finance_tracker.domain.models import (
    BudgetStatus,
    CategoryAmount,
    Transaction,
)
from finance_tracker.infrastructure.container import (
    build_auth_service,
    build_finance_service,
    build_settings,
    build_user_repository,
)
from finance_tracker.infrastructure.notifications import (
    ERROR,
    SUCCESS,
    WARNING,
    CollectingNotificationService,
)
from finance_tracker.infrastructure.settings import FinanceSettings

PERIODS = ["All Time", "YTD", "QTD", "MTD"]


@st.cache_resource(show_spinner=False)
def _load_settings() -> FinanceSettings:
    """Cached settings shared by every browser session."""
    return build_settings()


@st.cache_resource(show_spinner=False)
def _load_repository() -> UserRepositoryPort:
    """Cached user repository shared by every browser session."""
    return build_user_repository(_load_settings())


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    symbol = "₽" if currency_code == "RUB" else currency_code
    return f"{value:,.2f} {symbol}"


def _get_period_start(
    period: str,
    today: date,
) -> datetime | None:
    """Return the first instant of the selected period."""
    if period == "All Time":
        return None
    if period == "YTD":
        start = date(today.year, 1, 1)
    elif period == "MTD":
        start = date(today.year, today.month, 1)
    elif period == "QTD":
        quarter = (today.month - 1) // 3
        start = date(today.year, quarter * 3 + 1, 1)
    else:
        return None
    return datetime.combine(start, time.min)


def _prepare_donut_chart_data(
    items: Sequence[CategoryAmount],
    currency_code: str,
    max_categories: int = 6,
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data with a Top-N + Other grouping.

    Args:
        items: Aggregated amounts by category.
        currency_code: Currency used for labels.
        max_categories: Maximum categories to keep before grouping into Other.

    Returns:
        Tuple with Altair-ready chart data and the total amount.
    """
    sorted_items = sorted(items, key=lambda item: item.amount, reverse=True)
    top_items = sorted_items[:max_categories]
    other_items = sorted_items[max_categories:]
    other_amount = sum(
        (item.amount for item in other_items),
        start=Decimal("0"),
    )
    if other_items and other_amount != 0:
        top_items = [
            *top_items,
            CategoryAmount(category="Other", amount=other_amount),
        ]
    total_amount = sum(
        (item.amount for item in sorted_items),
        start=Decimal("0"),
    )
    data: list[dict[str, str | float]] = []
    for item in top_items:
        share = (
            (item.amount / total_amount) * Decimal("100")
            if total_amount
            else Decimal("0")
        )
        data.append(
            {
                "category": item.category,
                "amount": float(item.amount),
                "amount_label": _format_currency(item.amount, currency_code),
                "share_label": f"{share:.1f}%",
            }
        )
    return data, total_amount


def _transactions_table(
    transactions: Sequence[Transaction],
    currency_code: str,
) -> list[dict[str, str]]:
    """Return table rows, newest first."""
    ordered = sorted(
        transactions,
        key=lambda t: t.created_at,
        reverse=True,
    )
    return [
        {
            "Date": t.created_at.strftime("%d.%m.%Y %H:%M"),
            "Type": "Income" if t.is_income else "Expense",
            "Amount": _format_currency(
                t.amount if t.is_income else -t.amount,
                currency_code,
            ),
            "Category": t.category,
            "Description": t.description or "—",
            "ID": t.id,
        }
        for t in ordered
    ]


def _budget_table(
    statuses: Sequence[BudgetStatus],
    currency_code: str,
    warning_threshold: float,
) -> list[dict[str, str]]:
    """Return budget rows with a status label per category."""
    rows = []
    for status in statuses:
        if status.exceeded:
            label = "Exceeded"
        elif status.near_limit(warning_threshold):
            label = "Warning"
        else:
            label = "OK"
        rows.append(
            {
                "Category": status.category,
                "Budget": _format_currency(status.limit, currency_code),
                "Spent": _format_currency(status.spent, currency_code),
                "Remaining": _format_currency(
                    status.remaining,
                    currency_code,
                ),
                "Used": f"{status.usage_percent:.1f}%",
                "Status": label,
            }
        )
    return rows


def _get_session() -> Session:
    if "session" not in st.session_state:
        st.session_state["session"] = Session()
    return st.session_state["session"]


def _get_notifications() -> CollectingNotificationService:
    if "notifications" not in st.session_state:
        st.session_state["notifications"] = CollectingNotificationService()
    return st.session_state["notifications"]


def _render_notifications(
    notifications: CollectingNotificationService,
) -> None:
    """Show and clear pending finance notifications."""
    for notification in notifications.drain():
        if notification.level == SUCCESS:
            st.success(notification.message)
        elif notification.level == WARNING:
            st.warning(notification.message)
        elif notification.level == ERROR:
            st.error(notification.message)
        else:
            st.info(notification.message)


def _render_expense_chart(
    items: Sequence[CategoryAmount],
    currency_code: str,
    title: str,
    max_categories: int = 6,
    chart_size: int = 320,
    legend_columns: int = 2,
) -> None:
    """Render a donut chart of amounts by category.

    Args:
        items: Aggregated amounts by category.
        currency_code: Currency used for labels.
        title: Chart title to display above the donut.
        max_categories: Maximum categories before grouping into Other.
        chart_size: Width/height for the chart canvas.
        legend_columns: Legend column count.
    """
    if not items:
        st.info("No amounts available for the chart.")
        return
    data, _ = _prepare_donut_chart_data(
        items,
        currency_code,
        max_categories=max_categories,
    )
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
        stroke="#0f1115",
        strokeWidth=2,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(
                range=[
                    "#1b9aaa",
                    "#2e7d32",
                    "#f4a261",
                    "#e76f51",
                    "#457b9d",
                    "#f6c453",
                    "#6c8ead",
                ]
            ),
            legend=alt.Legend(
                orient="bottom",
                title=None,
                direction="horizontal",
                columns=legend_columns,
                labelLimit=180,
            ),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.25)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
    ).encode(
        text="amount_label:N"
    )
    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(
        stroke=None
    )
    st.subheader(title)
    st.altair_chart(chart, width="stretch")


def _render_sidebar_auth(auth: AuthService, session: Session) -> None:
    """Render login/registration, or the logout button when logged in."""
    if session.is_authenticated:
        st.sidebar.write(f"Logged in as **{session.user.login}**")
        if st.sidebar.button("Log out"):
            auth.logout(session)
            st.rerun()
        return

    st.sidebar.subheader("Account")
    login = st.sidebar.text_input("Login")
    password = st.sidebar.text_input("Password", type="password")
    login_col, register_col = st.sidebar.columns(2)
    if login_col.button("Log in"):
        result = attempt(auth.login, session, login, password)
        if result.ok:
            st.rerun()
        st.sidebar.error(result.error.message)
    if register_col.button("Register"):
        result = attempt(auth.register, login, password)
        if result.ok:
            auth.save_all()
            st.sidebar.success(f"User {result.value.login} registered.")
        else:
            st.sidebar.error(result.error.message)


def _render_dashboard(service: FinanceService, currency_code: str) -> None:
    summary = service.get_summary()
    income_col, expense_col, balance_col = st.columns(3)
    income_col.metric(
        "Income",
        _format_currency(summary.total_income, currency_code),
    )
    expense_col.metric(
        "Expenses",
        _format_currency(summary.total_expense, currency_code),
    )
    balance_col.metric(
        "Balance",
        _format_currency(summary.balance, currency_code),
    )
    if summary.is_negative:
        st.error("Expenses exceed income.")
    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_expense_chart(
            summary.expense_by_category,
            currency_code,
            "Expenses by Category",
        )
    with chart_right:
        _render_expense_chart(
            summary.income_by_category,
            currency_code,
            "Income by Category",
        )


def _render_transactions(
    service: FinanceService,
    currency_code: str,
) -> None:
    period = st.selectbox("Period", PERIODS)
    now = datetime.now()
    start = _get_period_start(period, now.date())
    if start is None:
        transactions = service.get_all_transactions()
    else:
        transactions = service.get_transactions_by_period(start, now)
        summary = service.get_period_summary(start, now)
        st.caption(
            f"Income {_format_currency(summary.total_income, currency_code)}"
            f" / expenses "
            f"{_format_currency(summary.total_expense, currency_code)}"
        )
    st.caption(f"{len(transactions)} transactions shown")
    if not transactions:
        st.info("No transactions in this period.")
        return
    st.dataframe(
        _transactions_table(transactions, currency_code),
        width="stretch",
        hide_index=True,
        height=420,
    )


def _render_budgets(
    service: FinanceService,
    currency_code: str,
    warning_threshold: float,
) -> None:
    statuses = service.get_budget_statuses()
    if statuses:
        st.dataframe(
            _budget_table(statuses, currency_code, warning_threshold),
            width="stretch",
            hide_index=True,
        )
    else:
        st.info("No budgets set.")

    with st.form("budget_form"):
        category = st.text_input("Category")
        limit = st.number_input("Limit", min_value=0.0, step=100.0)
        set_col, remove_col = st.columns(2)
        set_clicked = set_col.form_submit_button("Set budget")
        remove_clicked = remove_col.form_submit_button("Remove budget")
    if set_clicked:
        result = attempt(
            service.set_budget,
            category,
            Decimal(str(limit)),
        )
        _report(result, f"Budget for '{category}' saved.")
    if remove_clicked:
        result = attempt(service.remove_budget, category)
        _report(result, f"Budget for '{category}' removed.")


def _render_operations(service: FinanceService, auth: AuthService) -> None:
    income_tab, expense_tab, transfer_tab = st.tabs(
        ["Income", "Expense", "Transfer"]
    )
    with income_tab, st.form("income_form"):
        amount = st.number_input("Amount", min_value=0.0, step=100.0)
        category = st.text_input("Category")
        description = st.text_input("Description")
        if st.form_submit_button("Add income"):
            result = attempt(
                service.add_income,
                Decimal(str(amount)),
                category,
                description,
            )
            _report(result, "Income added.")
    with expense_tab, st.form("expense_form"):
        amount = st.number_input("Amount", min_value=0.0, step=100.0)
        category = st.text_input("Category")
        description = st.text_input("Description")
        if st.form_submit_button("Add expense"):
            result = attempt(
                service.add_expense,
                Decimal(str(amount)),
                category,
                description,
            )
            _report(result, "Expense added.")
    with transfer_tab, st.form("transfer_form"):
        current = service.session.user
        recipients = [
            user.login for user in auth.get_all_users() if user != current
        ]
        to_login = st.selectbox("Recipient", recipients)
        amount = st.number_input("Amount", min_value=0.0, step=100.0)
        description = st.text_input("Comment")
        if st.form_submit_button("Transfer"):
            recipient = auth.find_user_by_login(to_login) if to_login else None
            result = attempt(
                service.transfer,
                recipient,
                Decimal(str(amount)),
                description,
            )
            _report(result, None)


def _report(result, success_message: str | None) -> None:
    if not result.ok:
        st.error(result.error.message)
    elif success_message:
        st.success(success_message)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Finance Tracker", layout="wide")
    st.title("Personal Finance Tracker")

    settings = _load_settings()
    auth = build_auth_service(_load_repository())
    session = _get_session()
    notifications = _get_notifications()
    _render_sidebar_auth(auth, session)

    if not session.is_authenticated:
        st.info("Log in or register to start tracking your finances.")
        return

    service = build_finance_service(session, notifications, settings)
    page = st.sidebar.selectbox(
        "Page",
        ["Dashboard", "Transactions", "Budgets", "Operations"],
    )
    if page == "Dashboard":
        _render_dashboard(service, settings.currency)
    elif page == "Transactions":
        _render_transactions(service, settings.currency)
    elif page == "Budgets":
        _render_budgets(
            service,
            settings.currency,
            settings.budget_warning_threshold,
        )
    else:
        _render_operations(service, auth)
    _render_notifications(notifications)
    auth.save_all(session)


if __name__ == "__main__":  # pragma: no cover
    main()
