"""Phase 3: companies, their equity products and the share inventory behind them.

Each company gets one product, and each product gets one bulk purchase. A new
bulk purchase is fully unallocated: ``total_value_received`` is the face value
of the shares (quantity times price per share) and ``value_remaining`` starts
equal to it. Allocations made by the investments seeder draw it down.
"""

import datetime
import logging
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.models import (
    BulkPurchase,
    Company,
    CompanyShareListing,
    Product,
    ProductFounder,
    ProductFundingRound,
    ProductHighlight,
    ProductKeyMetric,
    ProductPriceHistory,
    ProductRiskDisclosure,
    Sector,
    User,
)
from preiposip.seeders.base import (
    REFERENCE_DATE,
    REFERENCE_TIME,
    det_int,
    first_or_create,
    months_after,
    months_before,
    require,
    update_or_create,
)
from preiposip.services.wallet import GENESIS_ACCOUNT_USERNAME

logger = logging.getLogger(__name__)

BULK_DISCOUNT_PERCENTAGE = Decimal("5.00")

COMPANIES: list[dict[str, Any]] = [
    {
        "name": "TechCorp India",
        "slug": "techcorp-india",
        "sector": "technology",
        "description": "Leading SaaS platform for enterprise automation and AI-driven workflows.",
        "website": "https://techcorpindia.example.com",
        "founded_year": 2018,
        "headquarters": "Bangalore, Karnataka",
        "employees_count": 250,
        "is_featured": True,
        "product_name": "TechCorp Equity Shares",
        "price_per_share": Decimal("500"),
        "inventory_quantity": 10_000,
        "highlights": [
            "250+ Enterprise Clients",
            "40% YoY Revenue Growth",
            "AI-Powered Automation Platform",
        ],
        "founders": [
            ("Rajesh Kumar", "CEO & Co-Founder", "Former VP at a tech major, IIT Delhi"),
            ("Priya Sharma", "CTO & Co-Founder", "Ex-Engineering Lead, Stanford MS"),
        ],
    },
    {
        "name": "HealthPlus Solutions",
        "slug": "healthplus-solutions",
        "sector": "healthcare",
        "description": (
            "AI-powered telemedicine platform connecting patients with healthcare providers."
        ),
        "website": "https://healthplus.example.com",
        "founded_year": 2019,
        "headquarters": "Mumbai, Maharashtra",
        "employees_count": 180,
        "is_featured": True,
        "product_name": "HealthPlus Equity Shares",
        "price_per_share": Decimal("800"),
        "inventory_quantity": 5_000,
        "highlights": [
            "1M+ Registered Users",
            "Network of 5,000+ Doctors",
            "ISO 27001 Certified Platform",
        ],
        "founders": [
            ("Dr. Meera Nair", "CEO & Co-Founder", "Cardiologist, former AIIMS faculty"),
            ("Karan Malhotra", "CTO & Co-Founder", "Health-tech platform builder, IIT Bombay"),
        ],
    },
    {
        "name": "FinanceHub Technologies",
        "slug": "financehub-technologies",
        "sector": "financial-services",
        "description": "Digital lending platform providing instant personal and business loans.",
        "website": "https://financehub.example.com",
        "founded_year": 2020,
        "headquarters": "Gurugram, Haryana",
        "employees_count": 320,
        "is_featured": True,
        "product_name": "FinanceHub Equity Shares",
        "price_per_share": Decimal("600"),
        "inventory_quantity": 8_000,
        "highlights": [
            "₹500 Cr+ Loan Book",
            "NBFC License Approved",
            "15% Average Monthly Growth",
        ],
        "founders": [
            ("Amit Verma", "CEO & Co-Founder", "Former banker with 15 years in retail credit"),
            ("Sneha Kapoor", "CTO & Co-Founder", "Led risk engineering at a leading fintech"),
        ],
    },
    {
        "name": "EduTech Academy",
        "slug": "edutech-academy",
        "sector": "education",
        "description": (
            "Online learning platform offering skill development courses and certifications."
        ),
        "website": "https://edutech.example.com",
        "founded_year": 2017,
        "headquarters": "Pune, Maharashtra",
        "employees_count": 150,
        "is_featured": False,
        "product_name": "EduTech Equity Shares",
        "price_per_share": Decimal("1000"),
        "inventory_quantity": 3_000,
        "highlights": [
            "500,000+ Active Learners",
            "200+ Industry-Certified Courses",
            "Partnerships with Top Corporations",
        ],
        "founders": [
            ("Suresh Iyer", "CEO & Co-Founder", "Educator and author, IIM Ahmedabad"),
            ("Kavya Reddy", "CTO & Co-Founder", "Previously built adaptive learning systems"),
        ],
    },
    {
        "name": "GreenEnergy Innovations",
        "slug": "greenenergy-innovations",
        "sector": "energy",
        "description": "Renewable energy solutions provider focused on solar and wind power.",
        "website": "https://greenenergy.example.com",
        "founded_year": 2016,
        "headquarters": "Chennai, Tamil Nadu",
        "employees_count": 200,
        "is_featured": True,
        "product_name": "GreenEnergy Equity Shares",
        "price_per_share": Decimal("750"),
        "inventory_quantity": 6_000,
        "highlights": [
            "100 MW+ Renewable Capacity",
            "Government-Approved Projects",
            "Carbon Credit Certified",
        ],
        "founders": [
            ("Vijay Raghavan", "CEO & Co-Founder", "Two decades in power project development"),
            ("Anita Desai", "CTO & Co-Founder", "Solar grid specialist, IISc Bangalore"),
        ],
    },
]

# (round_type, amount_raised, valuation, years before the reference date)
FUNDING_ROUNDS: list[tuple[str, Decimal, Decimal, int]] = [
    ("Seed", Decimal("50000000"), Decimal("200000000"), 2),
    ("Series A", Decimal("150000000"), Decimal("600000000"), 1),
]

RISKS: list[tuple[str, str, str]] = [
    ("market", "Market volatility and regulatory changes may impact valuation.", "medium"),
    ("liquidity", "Limited liquidity until IPO or secondary sale opportunities arise.", "high"),
]


def product_slug(company_slug: str) -> str:
    return f"{company_slug}-shares"


def _years_before(day: datetime.date, years: int) -> datetime.date:
    return months_before(day, years * 12)


async def refresh_share_listing(
    session: AsyncSession,
    company: Company,
    product: Product,
    admin: User,
) -> CompanyShareListing:
    """Recompute the company's share listing from its bulk purchases."""
    result = await session.execute(
        select(
            func.coalesce(func.sum(BulkPurchase.total_quantity), 0),
            func.coalesce(func.sum(BulkPurchase.quantity_allocated), 0),
        ).where(BulkPurchase.product_id == product.id)
    )
    total, allocated = result.one()
    listing, _ = await update_or_create(
        session,
        CompanyShareListing,
        {"company_id": company.id},
        {
            "product_id": product.id,
            "share_type": "equity",
            "total_shares_available": int(total),
            "shares_allocated": int(allocated),
            "price_per_share": product.price_per_share,
            "listing_status": "approved",
            "approved_by_admin_id": admin.id,
            "approved_at": REFERENCE_TIME - datetime.timedelta(days=30),
        },
    )
    return listing


async def seed_company(session: AsyncSession, data: dict[str, Any], admin: User) -> None:
    sector = await require(session, Sector, "foundation", slug=data["sector"])
    company, _ = await update_or_create(
        session,
        Company,
        {"slug": data["slug"]},
        {
            "name": data["name"],
            "sector_id": sector.id,
            "description": data["description"],
            "website": data["website"],
            "founded_year": data["founded_year"],
            "headquarters": data["headquarters"],
            "employees_count": data["employees_count"],
            "status": "active",
            "is_featured": data["is_featured"],
        },
    )

    price: Decimal = data["price_per_share"]
    slug = product_slug(data["slug"])
    product, _ = await update_or_create(
        session,
        Product,
        {"slug": slug},
        {
            "company_id": company.id,
            "name": data["product_name"],
            "description": {
                "overview": f"Pre-IPO equity shares of {data['name']}",
                "investment_thesis": f"Strong growth potential in the {sector.name} sector",
            },
            "category": "equity",
            "price_per_share": price,
            "min_investment": Decimal("5000"),
            "max_investment": Decimal("1000000"),
            "is_active": True,
            "is_featured": data["is_featured"],
            "listing_date": months_after(REFERENCE_DATE, det_int(f"{slug}:listing", 6, 18)),
        },
    )

    for order, text in enumerate(data["highlights"], start=1):
        await update_or_create(
            session,
            ProductHighlight,
            {"product_id": product.id, "highlight_text": text},
            {"display_order": order},
        )

    for order, (name, role, bio) in enumerate(data["founders"], start=1):
        await update_or_create(
            session,
            ProductFounder,
            {"product_id": product.id, "name": name},
            {"role": role, "bio": bio, "display_order": order},
        )

    for round_type, raised, valuation, years in FUNDING_ROUNDS:
        await update_or_create(
            session,
            ProductFundingRound,
            {"product_id": product.id, "round_type": round_type},
            {
                "amount_raised": raised,
                "valuation": valuation,
                "funded_at": _years_before(REFERENCE_DATE, years),
            },
        )

    metrics = [
        ("Annual Revenue", f"₹{det_int(f'{slug}:revenue', 10, 100)} Cr"),
        ("Monthly Active Users", f"{det_int(f'{slug}:mau', 10_000, 1_000_000):,}"),
        ("YoY Growth", f"{det_int(f'{slug}:growth', 20, 60)}%"),
    ]
    for order, (name, value) in enumerate(metrics, start=1):
        await update_or_create(
            session,
            ProductKeyMetric,
            {"product_id": product.id, "metric_name": name},
            {"metric_value": value, "display_order": order},
        )

    for risk_type, description, severity in RISKS:
        await update_or_create(
            session,
            ProductRiskDisclosure,
            {"product_id": product.id, "risk_type": risk_type},
            {"description": description, "severity": severity},
        )

    price_points = [
        (
            months_before(REFERENCE_DATE, 6),
            (price * Decimal("0.8")).quantize(Decimal("0.01")),
            "Initial offering price",
        ),
        (months_before(REFERENCE_DATE, 1), price, "Post-funding valuation adjustment"),
    ]
    for effective_date, point_price, reason in price_points:
        await update_or_create(
            session,
            ProductPriceHistory,
            {"product_id": product.id, "effective_date": effective_date},
            {"price_per_share": point_price, "reason": reason},
        )

    # Inventory is never reset on a re-run; allocations may already draw on it.
    quantity: int = data["inventory_quantity"]
    face_value = price * quantity
    purchased_on = months_before(REFERENCE_DATE, det_int(f"{slug}:purchase", 1, 3))
    await first_or_create(
        session,
        BulkPurchase,
        {"product_id": product.id, "company_id": company.id},
        {
            "admin_id": admin.id,
            "total_quantity": quantity,
            "quantity_allocated": 0,
            "price_per_unit": price,
            "discount_percentage": BULK_DISCOUNT_PERCENTAGE,
            "actual_cost_paid": (face_value * (100 - BULK_DISCOUNT_PERCENTAGE) / 100).quantize(
                Decimal("0.01")
            ),
            "total_value_received": face_value,
            "value_remaining": face_value,
            "purchase_date": purchased_on,
            "source_type": "direct_company_purchase",
            "status": "active",
            "approved_by_admin_id": admin.id,
            "approved_at": datetime.datetime.combine(
                purchased_on, datetime.time(10), REFERENCE_TIME.tzinfo
            ),
        },
    )

    await refresh_share_listing(session, company, product, admin)
    logger.debug("Seeded company %s with product %s", company.slug, product.slug)


async def run(session: AsyncSession) -> None:
    admin = await require(session, User, "identity", username=GENESIS_ACCOUNT_USERNAME)
    for data in COMPANIES:
        await seed_company(session, data, admin)
    print(f"  ✓ Companies seeded: {len(COMPANIES)} records")
    print(f"  ✓ Products, inventory and share listings seeded: {len(COMPANIES)} records")
