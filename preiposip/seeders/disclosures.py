"""Phase 3: SEBI disclosure modules.

Each module is a draft-07 JSON schema describing the structured data a
company submits, plus the policy deciding when a submission goes stale:

* tier 1 modules make a company visible, tier 2 make it investable and
  tier 3 complete the full disclosure;
* ``update_required`` documents age after ``expected_update_days``;
* ``version_controlled`` documents become unstable after
  ``max_changes_per_window`` edits within ``stability_window_days``.
"""

from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.models import DisclosureModule, User
from preiposip.seeders.base import require, update_or_create
from preiposip.services.wallet import GENESIS_ACCOUNT_USERNAME

JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-07/schema#"
ICDR = "SEBI (ICDR) Regulations, 2018"
SEVERITIES = ["low", "medium", "high", "critical"]


def _obj(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object"}
    if required:
        schema["required"] = required
    schema["properties"] = properties
    return schema


def _array(items: dict[str, Any] | None = None, min_items: int | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "array"}
    if min_items is not None:
        schema["minItems"] = min_items
    if items is not None:
        schema["items"] = items
    return schema


def _str(**constraints: Any) -> dict[str, Any]:
    return {"type": "string", **constraints}


def _num(**constraints: Any) -> dict[str, Any]:
    return {"type": "number", **constraints}


def _schema(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    return {"$schema": JSON_SCHEMA_DRAFT} | _obj(properties, required)


def _risk_item(required: list[str], extra: dict[str, Any] | None = None) -> dict[str, Any]:
    properties = {
        "title": _str(),
        "description": _str(minLength=100),
        "severity": _str(enum=SEVERITIES),
    }
    return _obj(properties | (extra or {}), required)


MODULES: list[dict[str, Any]] = [
    {
        "code": "business_model",
        "name": "Business Model & Operations",
        "description": (
            "Comprehensive description of the company's business model, operations, "
            "products/services, and competitive positioning."
        ),
        "help_text": (
            "Provide detailed information about your business model, revenue streams, customer "
            "segments, key partners, and operational structure. This helps investors understand "
            "how your company creates, delivers, and captures value."
        ),
        "is_required": True,
        "display_order": 1,
        "tier": 1,
        "category": "operational",
        "document_type": "version_controlled",
        "stability_window_days": 365,
        "max_changes_per_window": 2,
        "icon": "building",
        "color": "blue",
        "json_schema": _schema(
            {
                "business_description": _str(
                    minLength=500,
                    maxLength=5000,
                    description="Detailed description of business model and operations",
                ),
                "revenue_streams": _array(
                    _obj(
                        {
                            "name": _str(),
                            "percentage": _num(minimum=0, maximum=100),
                            "description": _str(minLength=50),
                        },
                        ["name", "percentage", "description"],
                    ),
                    min_items=1,
                ),
                "customer_segments": _array(_str(), min_items=1),
                "competitive_advantages": _array(_str(minLength=50), min_items=2),
                "key_partners": _array(_str()),
                "market_size": _obj(
                    {
                        "tam": _num(description="Total Addressable Market in USD"),
                        "sam": _num(description="Serviceable Addressable Market in USD"),
                        "som": _num(description="Serviceable Obtainable Market in USD"),
                    }
                ),
            },
            [
                "business_description",
                "revenue_streams",
                "customer_segments",
                "competitive_advantages",
            ],
        ),
        "sebi_category": "Business Information",
        "regulatory_references": [
            {"regulation": ICDR, "section": "26(1)", "description": "Nature of business"},
        ],
        "approval_checklist": [
            "Verify business description is comprehensive and clear",
            "Check revenue stream percentages total 100%",
            "Validate competitive advantages are substantiated",
            "Confirm market size estimates are reasonable",
        ],
    },
    {
        "code": "financial_performance",
        "name": "Financial Performance",
        "description": (
            "Historical and current financial performance including revenue, profitability, "
            "cash flows, and key financial metrics."
        ),
        "help_text": (
            "Provide audited financial statements for the last 3 years. Include revenue trends, "
            "profitability metrics, cash flow statements, and key financial ratios. Be prepared "
            "to explain any significant changes."
        ),
        "is_required": True,
        "display_order": 2,
        "tier": 2,
        "category": "financial",
        "document_type": "update_required",
        "expected_update_days": 90,
        "icon": "chart-line",
        "color": "green",
        "json_schema": _schema(
            {
                "fiscal_year": _str(pattern="^[0-9]{4}-[0-9]{4}$"),
                "revenue": _obj(
                    {
                        "total": _num(minimum=0),
                        "breakdown": _array(_obj({"quarter": _str(), "amount": _num()})),
                    },
                    ["total", "breakdown"],
                ),
                "expenses": _obj(
                    {"total": _num(), "operating": _num(), "non_operating": _num()},
                    ["total", "operating", "non_operating"],
                ),
                "net_profit": _num(),
                "ebitda": _num(),
                "cash_flow": _obj(
                    {"operating": _num(), "investing": _num(), "financing": _num()}
                ),
                "key_metrics": _obj(
                    {
                        "gross_margin": _num(),
                        "net_margin": _num(),
                        "roe": _num(description="Return on Equity"),
                        "roa": _num(description="Return on Assets"),
                    }
                ),
            },
            ["fiscal_year", "revenue", "expenses", "net_profit", "cash_flow"],
        ),
        "sebi_category": "Financial Data",
        "regulatory_references": [
            {"regulation": ICDR, "section": "32", "description": "Financial information"},
        ],
        "approval_checklist": [
            "Verify financial statements are audited",
            "Check quarter breakdown matches annual total",
            "Validate profit/loss calculations",
            "Confirm cash flow statement balances",
        ],
    },
    {
        "code": "risk_factors",
        "name": "Risk Factors",
        "description": (
            "Comprehensive disclosure of material risks that could impact the company's "
            "business, financial condition, or future prospects."
        ),
        "help_text": (
            "Identify and describe all material risks including business risks, financial risks, "
            "regulatory risks, market risks, and operational risks. Be honest and comprehensive; "
            "this protects both you and investors."
        ),
        "is_required": True,
        "display_order": 3,
        "tier": 3,
        "category": "legal",
        "document_type": "version_controlled",
        "stability_window_days": 180,
        "max_changes_per_window": 3,
        "icon": "shield",
        "color": "red",
        "json_schema": _schema(
            {
                "business_risks": _array(
                    _risk_item(
                        ["title", "description", "severity", "mitigation"],
                        {
                            "mitigation": _str(minLength=50),
                            "likelihood": _str(enum=["unlikely", "possible", "likely", "certain"]),
                        },
                    ),
                    min_items=3,
                ),
                "financial_risks": _array(
                    _risk_item(["title", "description", "severity"]),
                    min_items=2,
                ),
                "regulatory_risks": _array(
                    _obj(
                        {"title": _str(), "description": _str(minLength=100)},
                        ["title", "description"],
                    ),
                    min_items=1,
                ),
                "market_risks": _array(),
                "operational_risks": _array(),
            },
            ["business_risks", "financial_risks", "regulatory_risks"],
        ),
        "sebi_category": "Risk Factors",
        "regulatory_references": [
            {"regulation": ICDR, "section": "33", "description": "Risk factors disclosure"},
        ],
        "approval_checklist": [
            "Verify all material risks are disclosed",
            "Check risk severity assessments are reasonable",
            "Validate mitigation strategies are provided",
            "Confirm no generic/boilerplate risk disclosures",
        ],
    },
    {
        "code": "board_management",
        "name": "Board & Management",
        "description": (
            "Information about board of directors, key management personnel, their "
            "backgrounds, and governance structure."
        ),
        "help_text": (
            "Provide details about your board composition, director qualifications, management "
            "team backgrounds, and corporate governance practices. Include any conflicts of "
            "interest or related party relationships."
        ),
        "is_required": True,
        "display_order": 4,
        "tier": 1,
        "category": "governance",
        "document_type": "version_controlled",
        "stability_window_days": 365,
        "max_changes_per_window": 2,
        "icon": "users",
        "color": "purple",
        "json_schema": _schema(
            {
                "board_members": _array(
                    _obj(
                        {
                            "name": _str(),
                            "designation": _str(
                                enum=[
                                    "Chairperson",
                                    "Managing Director",
                                    "Independent Director",
                                    "Non-Executive Director",
                                ]
                            ),
                            "qualification": _str(),
                            "experience": _str(minLength=100),
                            "other_directorships": _array(),
                        },
                        ["name", "designation", "qualification", "experience"],
                    ),
                    min_items=3,
                ),
                "key_management": _array(
                    _obj(
                        {
                            "name": _str(),
                            "designation": _str(),
                            "background": _str(minLength=100),
                        },
                        ["name", "designation", "background"],
                    ),
                    min_items=3,
                ),
                "governance_practices": _obj(
                    {
                        "board_meetings_per_year": _num(minimum=4),
                        "audit_committee_exists": {"type": "boolean"},
                        "nomination_committee_exists": {"type": "boolean"},
                        "remuneration_policy": _str(),
                    }
                ),
            },
            ["board_members", "key_management", "governance_practices"],
        ),
        "sebi_category": "Corporate Governance",
        "regulatory_references": [
            {
                "regulation": ICDR,
                "section": "26(1)(c)",
                "description": "Management and board details",
            },
        ],
        "approval_checklist": [
            "Verify board has minimum required independent directors",
            "Check director qualifications are appropriate",
            "Validate governance practices meet standards",
            "Confirm no undisclosed conflicts of interest",
        ],
    },
    {
        "code": "legal_compliance",
        "name": "Legal & Compliance",
        "description": (
            "Legal structure, compliance status, ongoing litigation, regulatory approvals, "
            "and intellectual property."
        ),
        "help_text": (
            "Disclose all material legal matters including pending litigation, regulatory "
            "investigations, compliance violations, intellectual property ownership, and "
            "material contracts. Full transparency is required."
        ),
        "is_required": False,
        "display_order": 5,
        "tier": 3,
        "category": "legal",
        "document_type": "version_controlled",
        "stability_window_days": 365,
        "max_changes_per_window": 2,
        "icon": "file-text",
        "color": "gray",
        "json_schema": _schema(
            {
                "legal_structure": _str(),
                "pending_litigation": _array(
                    _obj(
                        {
                            "case_number": _str(),
                            "description": _str(),
                            "status": _str(),
                            "potential_liability": _num(),
                        }
                    )
                ),
                "intellectual_property": _array(
                    _obj(
                        {
                            "type": _str(enum=["patent", "trademark", "copyright", "trade_secret"]),
                            "description": _str(),
                            "status": _str(),
                        }
                    )
                ),
                "regulatory_approvals": _array(),
                "material_contracts": _array(),
            }
        ),
        "sebi_category": "Legal Information",
        "regulatory_references": [
            {
                "regulation": ICDR,
                "section": "26(1)(f)",
                "description": "Legal and regulatory information",
            },
        ],
        "approval_checklist": [
            "Verify all material litigation is disclosed",
            "Check IP ownership is clear and documented",
            "Validate regulatory compliance status",
            "Confirm material contracts are disclosed",
        ],
    },
]


def module_values(module: dict[str, Any], created_by_id: Any) -> dict[str, Any]:
    """Fill in the columns every module shares."""
    values = {key: value for key, value in module.items() if key != "code"}
    values.setdefault("expected_update_days", None)
    values.setdefault("stability_window_days", None)
    values.setdefault("max_changes_per_window", None)
    return values | {
        "is_active": True,
        "freshness_weight": Decimal("1.00"),
        "default_data": None,
        "requires_admin_approval": True,
        "min_approval_reviews": 1,
        "created_by_id": created_by_id,
    }


async def run(session: AsyncSession) -> None:
    admin = await require(session, User, "identity", username=GENESIS_ACCOUNT_USERNAME)
    for module in MODULES:
        await update_or_create(
            session,
            DisclosureModule,
            {"code": module["code"]},
            module_values(module, admin.id),
        )
    print(f"  ✓ Disclosure modules seeded: {len(MODULES)} records")
