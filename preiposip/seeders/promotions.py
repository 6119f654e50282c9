"""Phase 5: promotional materials users download and share.

Titles are the natural key. Download counters are runtime state and are
never overwritten by a re-run.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.models import PromotionalMaterial
from preiposip.seeders.base import slugify, update_or_create

CATEGORIES = ("banners", "social", "videos", "documents", "presentations")

# (title, description, category, type, file name, size in bytes, dimensions)
MATERIALS: list[tuple[str, str, str, str, str, int, str]] = [
    (
        "PreIPO SIP Facebook Cover Banner",
        "High-quality Facebook cover banner for promoting PreIPO SIP investments.",
        "banners",
        "image",
        "preipo-facebook-cover.jpg",
        524_288,
        "1920x1080",
    ),
    (
        "Instagram Square Post",
        "Square format for Instagram posts about pre-IPO investment opportunities.",
        "social",
        "image",
        "preipo-instagram-post.jpg",
        358_400,
        "1080x1080",
    ),
    (
        "WhatsApp Story Template",
        "Vertical banner sized for WhatsApp status and Instagram stories.",
        "social",
        "image",
        "preipo-whatsapp-story.jpg",
        409_600,
        "1080x1920",
    ),
    (
        "LinkedIn Banner",
        "Professional banner for LinkedIn posts and company pages.",
        "banners",
        "image",
        "preipo-linkedin-banner.jpg",
        614_400,
        "1584x396",
    ),
    (
        "Twitter Header Image",
        "Header image for Twitter/X profiles that introduces pre-IPO investing.",
        "banners",
        "image",
        "preipo-twitter-header.jpg",
        471_040,
        "1500x500",
    ),
    (
        "PreIPO SIP Explainer Video",
        "60-second explainer on how PreIPO SIP works and what it offers.",
        "videos",
        "video",
        "preipo-explainer-60s.mp4",
        8_388_608,
        "1920x1080",
    ),
    (
        "Success Stories Video",
        "Investors share their experience of building a pre-IPO portfolio.",
        "videos",
        "video",
        "preipo-success-stories.mp4",
        15_728_640,
        "1920x1080",
    ),
    (
        "WhatsApp Status Video - 30s",
        "Short 30-second video sized for WhatsApp status and stories.",
        "videos",
        "video",
        "preipo-whatsapp-30s.mp4",
        5_242_880,
        "1080x1920",
    ),
    (
        "PreIPO Investment Guide PDF",
        "Guide to pre-IPO investing: eligibility, lock-in, taxation and exits.",
        "documents",
        "document",
        "preipo-investment-guide.pdf",
        2_097_152,
        "A4",
    ),
    (
        "FAQ Brochure",
        "Frequently asked questions about PreIPO SIP in a shareable format.",
        "documents",
        "document",
        "preipo-faq-brochure.pdf",
        1_048_576,
        "A4",
    ),
    (
        "Risk Disclosure Statement",
        "Official risk disclosure to share with prospective investors.",
        "documents",
        "document",
        "risk-disclosure.pdf",
        524_288,
        "A4",
    ),
    (
        "PreIPO SIP Business Presentation",
        "Slide deck explaining PreIPO SIP to prospective investors.",
        "presentations",
        "document",
        "preipo-business-presentation.pptx",
        5_242_880,
        "16:9",
    ),
    (
        "Investment Pitch Deck",
        "Pitch deck with market analysis and current investment opportunities.",
        "presentations",
        "document",
        "preipo-pitch-deck.pdf",
        3_145_728,
        "16:9",
    ),
    (
        "Referral Program Banner",
        "Banner for sharing your referral link and earning rewards.",
        "social",
        "image",
        "referral-program-banner.jpg",
        409_600,
        "1200x630",
    ),
    (
        "Investment Calculator Infographic",
        "Infographic of potential SIP returns over different horizons.",
        "social",
        "image",
        "investment-calculator-infographic.jpg",
        716_800,
        "1080x1350",
    ),
]


def material_values(
    title: str,
    description: str,
    category: str,
    type_: str,
    file_name: str,
    file_size: int,
    dimensions: str,
) -> dict[str, Any]:
    """Storage paths for one material; documents have no inline preview."""
    slug = slugify(title)
    file_url = f"/storage/materials/{category}/{file_name}"
    return {
        "description": description,
        "category": category,
        "type": type_,
        "file_url": file_url,
        "file_name": file_name,
        "file_size": file_size,
        "thumbnail_url": f"/storage/materials/thumbnails/{slug}-thumb.jpg",
        "preview_url": None if type_ == "document" else file_url,
        "dimensions": dimensions,
        "is_active": True,
    }


async def run(session: AsyncSession) -> None:
    for title, *fields in MATERIALS:
        await update_or_create(
            session, PromotionalMaterial, {"title": title}, material_values(title, *fields)
        )
    print(f"  ✓ Promotional materials seeded: {len(MATERIALS)} records")
    for category in CATEGORIES:
        count = sum(1 for material in MATERIALS if material[2] == category)
        print(f"    - {category}: {count}")
