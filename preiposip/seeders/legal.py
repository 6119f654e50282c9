"""Phase 1: versioned legal agreements rendered as HTML documents."""

import html

from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.models import LegalAgreement
from preiposip.seeders.base import REFERENCE_DATE, update_or_create

COMPANY_ADDRESS = (
    "Office No. 14, 2nd Floor, Crystal Business Park, Near Golden Nest Road, "
    "Mira Bhayandar (East), Thane, Maharashtra 401107, India"
)

# Each agreement body is a list of (heading, paragraphs) sections.
AGREEMENTS: list[dict] = [
    {
        "type": "terms_of_service",
        "title": "Terms of Service",
        "description": (
            "Comprehensive terms and conditions governing your use of PreIPO SIP "
            "platform and services."
        ),
        "version": "1.2.0",
        "require_signature": True,
        "sections": [
            (
                "Introduction and Acceptance",
                [
                    "These Terms of Service constitute a legally binding agreement between you "
                    "and Pre IPO SIP Private Limited governing your access to and use of the "
                    "platform, its services and associated features.",
                    "By creating an account or using any of our services you agree to be bound "
                    "by these Terms together with our Privacy Policy, Cookie Policy and AML & "
                    "KYC Policy.",
                ],
            ),
            (
                "About PreIPO SIP",
                [
                    "PreIPO SIP operates a SEBI-compliant digital platform that facilitates "
                    "investment in unlisted securities, pre-IPO shares and private equity "
                    "instruments, including systematic investment plans for private markets.",
                    f"Registered office: {COMPANY_ADDRESS}.",
                ],
            ),
            (
                "Eligibility and Account Registration",
                [
                    "You must be at least 18 years old, a resident of India with a valid PAN "
                    "and complete KYC verification before investing.",
                ],
            ),
            (
                "Investment Services and Transactions",
                [
                    "Shares are allocated from platform inventory in the order payments are "
                    "received. Allocations are final once confirmed.",
                ],
            ),
            (
                "Fees, Charges, and Payments",
                [
                    "Applicable fees, including withdrawal processing fees and statutory "
                    "deductions such as TDS, are disclosed before each transaction.",
                ],
            ),
            (
                "Risk Disclosure",
                [
                    "Investments in unlisted securities are illiquid and may result in the loss "
                    "of the entire capital invested.",
                ],
            ),
            (
                "Dispute Resolution and Governing Law",
                [
                    "These Terms are governed by the laws of India and disputes are subject to "
                    "the exclusive jurisdiction of the courts at Mumbai.",
                ],
            ),
        ],
    },
    {
        "type": "privacy_policy",
        "title": "Privacy Policy",
        "description": "How we collect, use, protect, and handle your personal information.",
        "version": "1.1.0",
        "require_signature": True,
        "sections": [
            (
                "Overview",
                [
                    "This Privacy Policy explains how Pre IPO SIP Private Limited collects, "
                    "uses, discloses and safeguards your information when you use our services.",
                ],
            ),
            (
                "Information We Collect",
                [
                    "Identity data such as name, date of birth, PAN and Aadhaar details; contact "
                    "data such as email, mobile number and address; financial data such as bank "
                    "account details and investment history.",
                ],
            ),
            (
                "Use of Your Information",
                [
                    "We use your information to manage your account, process investments, "
                    "verify your identity under KYC/AML regulations and prevent fraud.",
                ],
            ),
            (
                "Disclosure of Your Information",
                [
                    "Information may be shared where required by law and with service providers "
                    "that perform payment processing, hosting and customer support for us.",
                ],
            ),
            (
                "Security of Your Information",
                [
                    "We use administrative, technical and physical safeguards, but no method of "
                    "transmission or storage is completely secure.",
                ],
            ),
            (
                "Policy for Children",
                ["We do not knowingly collect information from anyone under the age of 18."],
            ),
            (
                "Contact Us",
                [f"Email legal@preiposip.com or write to us at {COMPANY_ADDRESS}."],
            ),
        ],
    },
    {
        "type": "cookie_policy",
        "title": "Cookie Policy",
        "description": "Information about how we use cookies and similar tracking technologies.",
        "version": "1.0.0",
        "require_signature": False,
        "sections": [
            (
                "What are Cookies?",
                [
                    "Cookies are small data files placed on your device when you visit a "
                    "website. They make websites work and provide reporting information.",
                ],
            ),
            (
                "Types of Cookies Used",
                [
                    "Essential cookies are required to operate the platform. Performance, "
                    "functionality and analytics cookies help us improve it.",
                ],
            ),
            (
                "Managing Cookies",
                [
                    "You can accept or refuse cookies through your browser settings; some "
                    "features may be unavailable if you reject them.",
                ],
            ),
        ],
    },
    {
        "type": "refund_policy",
        "title": "Refund Policy",
        "description": (
            "Terms and conditions regarding refunds, cancellations, and payment processing."
        ),
        "version": "1.0.0",
        "require_signature": True,
        "sections": [
            (
                "General Principle",
                [
                    "Investments once executed are generally non-refundable. Specific rules "
                    "apply to failed transactions and processing errors.",
                ],
            ),
            (
                "Failed Transactions",
                [
                    "Amounts debited for a failed or pending transaction are refunded to the "
                    "source bank account within 5-7 working days.",
                ],
            ),
            (
                "Cancellations",
                [
                    "Orders can be cancelled only before they are processed. Allocated shares "
                    "cannot be cancelled or refunded.",
                ],
            ),
            (
                "Dispute Resolution",
                [
                    "Report processing errors to support@preiposip.com; we resolve them within "
                    "7 business days.",
                ],
            ),
        ],
    },
    {
        "type": "aml_kyc_policy",
        "title": "Anti-Money Laundering & KYC Policy",
        "description": (
            "Our Anti-Money Laundering and Know Your Customer compliance procedures."
        ),
        "version": "1.1.0",
        "require_signature": True,
        "sections": [
            (
                "Introduction",
                [
                    "This policy complies with the Prevention of Money Laundering Act, 2002, "
                    "SEBI KYC regulations and FATF recommendations.",
                ],
            ),
            (
                "Know Your Customer Requirements",
                [
                    "Every investor must provide PAN, proof of address and bank account details. "
                    "Customers are classified into low, medium and high risk categories.",
                ],
            ),
            (
                "Transaction Monitoring",
                [
                    "Transactions are monitored for unusual patterns; suspicious activity is "
                    "reported to the Financial Intelligence Unit - India.",
                ],
            ),
            (
                "Record Keeping",
                [
                    "Customer and transaction records are kept for at least five years after "
                    "the relationship ends.",
                ],
            ),
        ],
    },
    {
        "type": "risk_disclosure",
        "title": "Risk Disclosure Document",
        "description": (
            "Critical information regarding the risks associated with unlisted investments."
        ),
        "version": "1.0.0",
        "require_signature": True,
        "sections": [
            (
                "Market and Liquidity Risks",
                [
                    "Unlisted securities are not traded on recognised exchanges and you may not "
                    "be able to sell them quickly or at the price you want.",
                    "Valuations rely on estimates and last funding rounds, which may not reflect "
                    "realisable value.",
                ],
            ),
            (
                "Company and Business Risks",
                [
                    "Early-stage companies may fail, leading to a total loss of capital. Less "
                    "information is available than for listed companies.",
                ],
            ),
            (
                "No Guarantee of Returns",
                [
                    "Past performance is not indicative of future results. You may lose some or "
                    "all of your invested capital.",
                ],
            ),
        ],
    },
    {
        "type": "investment_disclaimer",
        "title": "Investment Disclaimer",
        "description": "SEBI compliance statement for investments made through the platform.",
        "version": "1.0.0",
        "require_signature": True,
        "sections": [
            (
                "SEBI Compliance",
                [
                    "This platform operates in accordance with SEBI regulations. Information on "
                    "the platform is not investment advice.",
                ],
            ),
        ],
    },
]


def render_document(
    title: str,
    version: str,
    sections: list[tuple[str, list[str]]],
) -> str:
    """Render an agreement as the HTML body stored in ``legal_agreements.content``."""
    effective = REFERENCE_DATE.strftime("%B %d, %Y")
    parts = [
        '<div class="legal-document">',
        f"<h1>{html.escape(title)}</h1>",
        f'<p class="effective-date"><strong>Effective Date:</strong> {effective}</p>',
    ]
    for number, (heading, paragraphs) in enumerate(sections, start=1):
        parts.append("<section>")
        parts.append(f"<h2>{number}. {html.escape(heading)}</h2>")
        parts.extend(f"<p>{html.escape(paragraph)}</p>" for paragraph in paragraphs)
        parts.append("</section>")
    parts.append(
        f'<hr><p class="footer-note"><em>Last Updated: {effective} | Version {version}</em></p>'
    )
    parts.append("</div>")
    return "\n".join(parts)


async def run(session: AsyncSession) -> None:
    for agreement in AGREEMENTS:
        values = {
            "title": agreement["title"],
            "description": agreement["description"],
            "content": render_document(
                agreement["title"], agreement["version"], agreement["sections"]
            ),
            "version": agreement["version"],
            "status": "active",
            "effective_date": REFERENCE_DATE,
            "require_signature": agreement["require_signature"],
            "is_template": False,
        }
        await update_or_create(session, LegalAgreement, {"type": agreement["type"]}, values)
    print(f"  ✓ Legal agreements seeded: {len(AGREEMENTS)} records")
