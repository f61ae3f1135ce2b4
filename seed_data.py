import random
from datetime import date
from decimal import Decimal

from models.finance import (
    EXPENSE,
    INCOME,
    OTHER,
    TRANSFER,
    Account,
    Category,
    TransactionCandidate,
)
from models.insights import Insight, InsightModule
from utils.dates import add_months
from utils.money import round_money

DEMO_USER_ID = "demo-user"

CATEGORIES = [
    Category(100, "Home", "Home", EXPENSE),
    Category(101, "Rent", "Rent", EXPENSE, parent_id=100),
    Category(102, "Pets", "Pets", EXPENSE),
    Category(103, "Daycare", "Daycare", EXPENSE),
    Category(104, "Transport", "Transport", EXPENSE),
    Category(105, "Car", "Car", EXPENSE, parent_id=104),
    Category(106, "Bank and other fees", "Bank & fees", EXPENSE),
    Category(107, "Other bills", "Other bills", EXPENSE),
    Category(108, "Utilities (Home insurance)", "Home insurance", EXPENSE, parent_id=100),
    Category(109, "Utilities (Gas)", "Gas utility", EXPENSE, parent_id=100),
    Category(110, "Utilities (Car insurance)", "Car insurance", EXPENSE, parent_id=104),
    Category(111, "Utilities (Electric)", "Electricity", EXPENSE, parent_id=100),
    Category(112, "Utilities (Water)", "Water", EXPENSE, parent_id=100),
    Category(113, "Utilities (Utility)", "Utilities", EXPENSE, parent_id=100),
    Category(114, "Utilities (Cell phones)", "Cell phones", EXPENSE, parent_id=107),
    Category(115, "Utilities (Internet)", "Internet", EXPENSE, parent_id=107),
    Category(116, "Groceries", "Groceries", EXPENSE),
    Category(117, "Eating Out", "Eating out", EXPENSE),
    Category(118, "Coffee", "Coffee", EXPENSE),
    Category(119, "Health", "Health", EXPENSE),
    Category(120, "Travel", "Travel", EXPENSE),
    Category(121, "Shopping", "Shopping", EXPENSE),
    Category(122, "Clothes", "Clothes", EXPENSE, parent_id=121),
    Category(123, "Beauty", "Beauty", EXPENSE),
    Category(124, "Education", "Education", EXPENSE),
    Category(125, "Work", "Work", EXPENSE),
    Category(126, "Subscriptions", "Subscriptions", EXPENSE),
    Category(127, "Family & Personal", "Family & personal", EXPENSE),
    Category(128, "Sport & Hobbies", "Sport & hobbies", EXPENSE),
    Category(129, "Entertainment", "Entertainment", EXPENSE),
    Category(130, "Gym membership", "Gym membership", EXPENSE),
    Category(131, "Salary", "Salary", INCOME),
    Category(132, "Business", "Business", INCOME),
    Category(133, "Loan", "Loan", INCOME),
    Category(134, "Gifts", "Gifts", INCOME),
    Category(135, "Extra income", "Extra income", INCOME),
    Category(136, "Other income", "Other income", INCOME),
    Category(137, "Tax", "Tax", OTHER),
    Category(138, "Transfers", "Transfers", TRANSFER),
]

CATEGORIES_BY_ID = {category.id: category for category in CATEGORIES}


def category_display_name(category_id: int) -> str:
    category = CATEGORIES_BY_ID.get(category_id)
    if category is None:
        return f"Category {category_id}"
    return category.display_name


DEMO_ACCOUNT = Account(
    id="demo-chequing",
    user_id=DEMO_USER_ID,
    name="Everyday Chequing",
    institution="Canadian Insights Demo Bank",
    type="chequing",
    currency="CAD",
)

SUBSCRIPTION_MERCHANTS = [
    ("Netflix", 126, Decimal("16.49")),
    ("Spotify", 126, Decimal("14.99")),
    ("Telus Mobility", 114, Decimal("85.00")),
    ("Hydro-Québec", 111, Decimal("98.50")),
]
GROCERY_MERCHANTS = ["Metro", "IGA", "Loblaws", "Costco"]
DINING_MERCHANTS = ["Tim Hortons", "Starbucks", "A&W", "Harvey's", "The Keg"]


def _between(rng: random.Random, low: float, high: float) -> Decimal:
    return round_money(Decimal(str(rng.uniform(low, high))))


def _expense(day, name, amount, category_id, recurring=False) -> TransactionCandidate:
    return TransactionCandidate(
        date=day,
        description=name,
        normalized_name=name.lower(),
        amount=-amount,
        currency="CAD",
        transaction_type=EXPENSE,
        cashflow_sign=-1,
        is_recurring=recurring,
        category_id=category_id,
        merchant_id="".join(c if c.isalpha() else "-" for c in name.lower()),
    )


def build_demo_transactions(today: date = None, rng: random.Random = None) -> list:
    """Eight months of plausible household activity ending at ``today``.

    Amounts are jittered with ``rng``; this is the only randomness in the
    application and it runs once, when the demo user is seeded.
    """
    today = today or date.today()
    rng = rng or random.Random()
    transactions = []

    for name, category_id, base in SUBSCRIPTION_MERCHANTS:
        for idx in range(8):
            amount = round_money(base + _between(rng, -5, 12) + idx * _between(rng, -1, 2))
            transactions.append(
                _expense(add_months(today, -idx), name, amount, category_id, recurring=True)
            )

    for idx in range(24):
        merchant = GROCERY_MERCHANTS[idx % len(GROCERY_MERCHANTS)]
        day = add_months(add_months(today, -6), idx % 6)
        transactions.append(_expense(day, merchant, _between(rng, 65, 130), 116))

    for idx in range(16):
        merchant = DINING_MERCHANTS[idx % len(DINING_MERCHANTS)]
        day = add_months(add_months(today, -4), idx % 4)
        transactions.append(_expense(day, merchant, _between(rng, 8, 45), 117))

    for idx in range(6):
        transactions.append(TransactionCandidate(
            date=add_months(today, -idx),
            description="Employer Inc. Payroll",
            normalized_name="employer inc",
            amount=Decimal("3985.50"),
            currency="CAD",
            transaction_type=INCOME,
            cashflow_sign=1,
            is_recurring=True,
            category_id=131,
            merchant_id="employer-inc",
        ))

    transactions.append(TransactionCandidate(
        date=add_months(today, -1),
        description="TFSA Transfer",
        normalized_name="transfer tfsa",
        amount=Decimal("-500.00"),
        currency="CAD",
        transaction_type=TRANSFER,
        cashflow_sign=0,
        is_transfer=True,
        category_id=138,
        merchant_id="tfsa-transfer",
    ))

    return transactions


INSIGHT_MODULES = [
    InsightModule(
        id="subscriptions",
        title="Subscriptions & Bills",
        description="Spot recurring charges and recent increases.",
        insights=[
            Insight(
                id="insight-netflix-hike",
                user_id=DEMO_USER_ID,
                type="BILL_HIKE",
                title="Netflix increased by 9% vs 3-mo avg",
                body="We noticed your Netflix membership climbed from $15.10 to $16.45. "
                     "Consider downgrading or sharing a family plan.",
                data={"merchant": "Netflix", "categoryId": 126, "change": 0.09},
            ),
            Insight(
                id="insight-spotify",
                user_id=DEMO_USER_ID,
                type="SUBSCRIPTION",
                title="Spotify charged $14.99 on the 15th",
                body="Spotify Premium posts monthly around the 15th. "
                     "Keep or cancel from the Spotify account centre.",
                data={"merchant": "Spotify", "cadence": "monthly"},
            ),
        ],
    ),
    InsightModule(
        id="fees",
        title="Fees & Outliers",
        description="Surface unexpected bank fees or duplicates.",
        insights=[
            Insight(
                id="insight-bank-fee",
                user_id=DEMO_USER_ID,
                type="FEE_ALERT",
                title="Your bank charged a $12.00 account fee",
                body="Canadian Insights Demo Bank collected $12.00 in fees last month. "
                     "You could save by maintaining the minimum balance.",
                data={"amount": 12, "merchant": "Canadian Insights Demo Bank"},
            ),
        ],
    ),
    InsightModule(
        id="peer",
        title="Peer comparisons",
        description="Tasteful comparisons versus similar Canadians.",
        insights=[
            Insight(
                id="insight-peer-groceries",
                user_id=DEMO_USER_ID,
                type="PEER_COMPARISON",
                title="Groceries trending 8% above similar households",
                body="Households in Québec with 2 people spend about $540/mo on groceries. "
                     "You averaged $584.",
                data={"categoryId": 116, "cohort": "QC households (2 people)", "delta": 0.08},
            ),
        ],
    ),
]

INSIGHT_FEEDBACK_OPTIONS = [
    {"value": "USEFUL", "label": "Insightful"},
    {"value": "NOT_RELEVANT", "label": "Not relevant"},
    {"value": "TOO_OBVIOUS", "label": "Too obvious"},
    {"value": "INACCURATE", "label": "Inaccurate"},
    {"value": "OTHER", "label": "Other"},
]
