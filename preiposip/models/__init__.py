from preiposip.models.activity import (
    BonusTransaction,
    Investment,
    Payment,
    Referral,
    Subscription,
    UserInvestment,
    Withdrawal,
)
from preiposip.models.base import Base
from preiposip.models.catalog import (
    BulkPurchase,
    Company,
    CompanyShareListing,
    CompanyUser,
    Product,
    ProductFounder,
    ProductFundingRound,
    ProductHighlight,
    ProductKeyMetric,
    ProductPriceHistory,
    ProductRiskDisclosure,
)
from preiposip.models.communication import (
    Campaign,
    CannedResponse,
    EmailTemplate,
    KbArticle,
    KbCategory,
    LuckyDraw,
    PromotionalMaterial,
    ReferralCampaign,
    SmsTemplate,
)
from preiposip.models.disclosure import DisclosureModule
from preiposip.models.engagement import (
    LuckyDrawEntry,
    ProfitShare,
    SupportMessage,
    SupportTicket,
    UserProfitShare,
)
from preiposip.models.foundation import (
    FeatureFlag,
    KycRejectionTemplate,
    LegalAgreement,
    Permission,
    Role,
    Sector,
    Setting,
    role_permissions,
)
from preiposip.models.identity import User, UserKyc, UserProfile, UserSetting, user_roles
from preiposip.models.ledger import AdminLedgerEntry, Transaction, Wallet
from preiposip.models.plans import Menu, MenuItem, Plan, PlanConfig, PlanFeature

__all__ = [
    "AdminLedgerEntry",
    "Base",
    "BonusTransaction",
    "BulkPurchase",
    "Campaign",
    "CannedResponse",
    "Company",
    "CompanyShareListing",
    "CompanyUser",
    "DisclosureModule",
    "EmailTemplate",
    "FeatureFlag",
    "Investment",
    "KbArticle",
    "KbCategory",
    "KycRejectionTemplate",
    "LegalAgreement",
    "LuckyDraw",
    "LuckyDrawEntry",
    "Menu",
    "MenuItem",
    "Payment",
    "Permission",
    "Plan",
    "PlanConfig",
    "PlanFeature",
    "Product",
    "ProductFounder",
    "ProductFundingRound",
    "ProductHighlight",
    "ProductKeyMetric",
    "ProductPriceHistory",
    "ProductRiskDisclosure",
    "ProfitShare",
    "PromotionalMaterial",
    "Referral",
    "ReferralCampaign",
    "Role",
    "Sector",
    "Setting",
    "SmsTemplate",
    "Subscription",
    "SupportMessage",
    "SupportTicket",
    "Transaction",
    "User",
    "UserInvestment",
    "UserKyc",
    "UserProfile",
    "UserProfitShare",
    "UserSetting",
    "Wallet",
    "Withdrawal",
    "role_permissions",
    "user_roles",
]
