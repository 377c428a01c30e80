"""Static reference data for report types, categories, priorities and statuses."""

from typing import NamedTuple, Optional


class CatalogItem(NamedTuple):
    """Display metadata for one catalog key."""

    key: str
    label: str
    icon: str
    description: str = ""
    color: Optional[str] = None  # display colour token (priorities and statuses)


REPORT_TYPES: tuple[CatalogItem, ...] = (
    CatalogItem(
        "issue",
        "Issue/Problem",
        "⚠️",
        "Report problems, complaints, or infrastructure issues",
    ),
    CatalogItem(
        "compliment",
        "Compliment",
        "👏",
        "Appreciate well-done work by officials or departments",
    ),
    CatalogItem(
        "suggestion",
        "Suggestion",
        "💡",
        "Propose ideas for improvement or community enhancement",
    ),
    CatalogItem(
        "request",
        "Request",
        "📝",
        "Request services, assistance, or resources",
    ),
)

REPORT_CATEGORIES: tuple[CatalogItem, ...] = (
    # Infrastructure
    CatalogItem("roads_highways", "Roads & Highways", "🛣️"),
    CatalogItem("bridges", "Bridges", "🌉"),
    CatalogItem("street_lights", "Street Lights", "💡"),
    CatalogItem("drainage", "Drainage Systems", "🌊"),
    CatalogItem("public_buildings", "Public Buildings", "🏛️"),
    # Utilities
    CatalogItem("water_supply", "Water Supply", "💧"),
    CatalogItem("electricity", "Electricity", "⚡"),
    CatalogItem("internet", "Internet/Connectivity", "📡"),
    CatalogItem("waste_management", "Waste Management", "🗑️"),
    CatalogItem("sewerage", "Sewerage", "🚰"),
    # Health and safety
    CatalogItem("healthcare", "Healthcare Facilities", "🏥"),
    CatalogItem("security", "Security/Police", "👮"),
    CatalogItem("fire_services", "Fire Services", "🚒"),
    CatalogItem("emergency", "Emergency Services", "🚑"),
    CatalogItem("public_safety", "Public Safety", "🛡️"),
    # Education
    CatalogItem("schools", "Schools", "🏫"),
    CatalogItem("libraries", "Libraries", "📚"),
    CatalogItem("education_programs", "Educational Programs", "📖"),
    # Environment
    CatalogItem("environment", "Environment", "🌳"),
    CatalogItem("pollution", "Pollution", "🏭"),
    # Transportation
    CatalogItem("public_transport", "Public Transport", "🚌"),
    CatalogItem("traffic", "Traffic Management", "🚦"),
    CatalogItem("parking", "Parking", "🅿️"),
    # Community
    CatalogItem("community_centers", "Community Centers", "🏘️"),
    CatalogItem("social_welfare", "Social Welfare", "🤝"),
    CatalogItem("governance", "Governance", "⚖️"),
    CatalogItem("corruption", "Corruption Reports", "⚠️"),
    CatalogItem("other", "Other", "📋"),
)

REPORT_PRIORITIES: tuple[CatalogItem, ...] = (
    CatalogItem(
        "low", "Low", "🔵", "Non-urgent, can be addressed in normal timeline", "blue"
    ),
    CatalogItem(
        "medium", "Medium", "🟡", "Needs attention within a reasonable timeframe", "yellow"
    ),
    CatalogItem("high", "High", "🟠", "Requires prompt attention", "orange"),
    CatalogItem(
        "urgent", "Urgent", "🔴", "Immediate action required, safety concern", "red"
    ),
)

REPORT_STATUSES: tuple[CatalogItem, ...] = (
    CatalogItem("new", "New", "🆕", "Report just submitted, awaiting review", "blue"),
    CatalogItem(
        "under_review",
        "Under Review",
        "👀",
        "Authorities have acknowledged, investigation in progress",
        "yellow",
    ),
    CatalogItem(
        "in_progress",
        "In Progress",
        "⚙️",
        "Action being taken, work has started",
        "orange",
    ),
    CatalogItem(
        "resolved",
        "Resolved",
        "✅",
        "Issue fixed/addressed, awaiting confirmation",
        "green",
    ),
    CatalogItem("closed", "Closed", "🔒", "Report completed and closed", "gray"),
    CatalogItem("rejected", "Rejected", "❌", "Report deemed invalid or duplicate", "red"),
)
