"""Published help-centre articles, filed under the KB categories from ``communication``."""

import datetime
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.models import KbArticle, KbCategory, User
from preiposip.seeders.base import REFERENCE_TIME, det_int, require, slugify, update_or_create
from preiposip.services.wallet import GENESIS_ACCOUNT_USERNAME

logger = logging.getLogger(__name__)

# category slug -> [(title, summary, last_updated, content), ...]
ARTICLES: dict[str, list[tuple[str, str, datetime.date, str]]] = {
    "getting-started": [
        (
            "What is PreIPOsip?",
            "Overview of PreIPOsip and what we offer.",
            datetime.date(2025, 11, 20),
            "PreIPOsip is a specialised fintech platform that helps retail and accredited "
            "investors participate in pre-IPO opportunities and manage recurring investments "
            "through SIP-like structures. Our product pillars are pre-IPO access, SIP "
            "automation and portfolio tracking.\n\n"
            "Pre-IPO opportunities historically had high barriers; PreIPOsip lowers them with "
            "standardized documentation, eligibility checks and fractional allocation models.",
        ),
        (
            "How to create an account",
            "Step-by-step sign up guide.",
            datetime.date(2025, 11, 25),
            "Creating an account on PreIPOsip is fast and secure. You will need an email "
            "address, a mobile number and your PAN for KYC.\n\n"
            "Use a personal email, keep documents handy and follow the selfie guidance for "
            "faster approval. If you run into issues, contact support with screenshots of the "
            "error; our team usually responds within one business day.",
        ),
        (
            "Tour of the dashboard",
            "Understanding the main screens.",
            datetime.date(2025, 11, 5),
            "The dashboard is your control center: portfolio summary, upcoming pre-IPO "
            "offerings, active SIPs and alerts. Each panel can be filtered, and allocation "
            "statuses are shown next to every holding.\n\n"
            "Pin frequently used panels and enable alerts for allocation announcements.",
        ),
    ],
    "kyc-verification": [
        (
            "What documents are required for KYC",
            "List of acceptable documents.",
            datetime.date(2025, 11, 29),
            "We require a government-issued ID (PAN and Aadhaar), proof of address and a clear "
            "selfie for identity verification.\n\n"
            "Upload high-resolution scans; avoid photocopies and photos with filters.",
        ),
        (
            "My KYC was rejected - next steps",
            "Why KYC fails and how to fix.",
            datetime.date(2025, 11, 30),
            "KYC rejections are commonly due to unclear images, mismatched names or expired "
            "IDs. The rejection email names the reason; fix it and resubmit from the KYC page.\n\n"
            "If repeated rejections occur, contact support for a manual review.",
        ),
        (
            "How long does KYC take?",
            "Typical verification timeframes.",
            datetime.date(2025, 11, 18),
            "Automated checks typically complete within minutes; manual reviews may take 24-72 "
            "hours. Public holidays and regulatory checks can add delays.",
        ),
    ],
    "investment-plans": [
        (
            "Start a SIP for pre-IPO investments",
            "Setting up recurring investments.",
            datetime.date(2025, 11, 13),
            "Our SIP plans automate monthly funding for allocations in curated deals. Pick a "
            "plan, choose a company and your first instalment is allocated as soon as the "
            "payment clears.\n\n"
            "SIP contributions are allocated against available inventory; they do not "
            "guarantee allocation in oversubscribed deals unless your plan says so.",
        ),
        (
            "How allocation works",
            "Understanding how shares are allotted to you.",
            datetime.date(2025, 11, 14),
            "Each payment buys whole shares at the current listing price from the inventory "
            "PreIPOsip holds for that company. Any amount left over after allocating whole "
            "shares stays in your wallet.",
        ),
        (
            "Progressive and milestone bonuses",
            "How plan bonuses are calculated.",
            datetime.date(2025, 10, 18),
            "Every plan pays a progressive bonus on the amount you have invested, at the rate "
            "shown on the plan page. Milestone bonuses are paid after 6 and 12 consecutive "
            "payments. Bonuses above the TDS threshold are credited net of TDS.",
        ),
    ],
    "payments-wallet": [
        (
            "Deposit via UPI / instant pay",
            "Using UPI and instant payment rails.",
            datetime.date(2025, 11, 22),
            "UPI payments are instant and commonly used for small to medium deposits. For "
            "recurring SIP payments, UPI auto-debit can be configured where your bank "
            "supports it.",
        ),
        (
            "Failed or pending deposit",
            "Troubleshooting failed deposits.",
            datetime.date(2025, 11, 26),
            "Failed deposits can result from a wrong reference, a bank reversal or a limit. "
            "Locate the transaction ID in your bank statement and send it to support so we "
            "can reconcile the payment.",
        ),
    ],
    "withdrawals": [
        (
            "Withdraw funds to your bank",
            "Withdrawal limits and steps.",
            datetime.date(2025, 11, 23),
            "Withdrawals are initiated from the Wallet page and typically process in 1-3 "
            "business days. A processing fee is deducted from the amount you withdraw.\n\n"
            "Keep your bank details updated to avoid rejections.",
        ),
        (
            "Add or change bank account",
            "How to link and verify bank accounts.",
            datetime.date(2025, 10, 30),
            "To add a bank account, submit the account number and IFSC and complete the "
            "small-amount verification when asked. Pending withdrawals keep using the account "
            "they were requested against.",
        ),
    ],
}


async def run(session: AsyncSession) -> None:
    author = await require(session, User, "identity", username=GENESIS_ACCOUNT_USERNAME)
    total = 0
    for category_slug, articles in ARTICLES.items():
        category = await require(session, KbCategory, "communication", slug=category_slug)
        for title, summary, last_updated, content in articles:
            slug = slugify(title)
            article, created = await update_or_create(
                session,
                KbArticle,
                {"slug": slug},
                {
                    "kb_category_id": category.id,
                    "author_id": author.id,
                    "title": title,
                    "summary": summary,
                    "content": content,
                    "status": "published",
                    "published_at": REFERENCE_TIME,
                    "last_updated": last_updated,
                },
            )
            # View counts are live data once the article exists.
            if created:
                article.views = det_int(f"kb-views:{slug}", 25, 200)
            total += 1
    await session.flush()
    logger.info("Seeded %d knowledge base articles", total)
    print(f"  ✓ KB articles seeded: {total} records")
