"""Tables of the storefront database."""

from enum import StrEnum


class Table(StrEnum):
    """Every table (MongoDB collection) of the storefront backend."""

    PRODUCTS = "products"
    BLOG_POSTS = "blog_posts"
    BLOG_CATEGORIES = "blog_categories"
    ABOUT_SECTIONS = "about_sections"
    ABOUT_FEATURES = "about_features"
    FOOTER_CONTENT = "footer_content"
    FOOTER_LINKS = "footer_links"
    HOMEPAGE_CONTENT = "homepage_content"
    DESIGN_OPTIONS = "design_options"
    DESIGN_TEMPLATES = "design_templates"
    STORY_RINGS = "story_rings"
    TRANSLATIONS = "translations"
    SEO_SETTINGS = "seo_settings"
    CONTACT_MESSAGES = "contact_messages"
    GALLERY_SETTINGS = "gallery_settings"
    JERSEY_TYPES = "jersey_types"
    PRICE_RANGES = "price_ranges"
    ORDER_QUANTITIES = "order_quantities"
    JERSEY_COLORS = "jersey_colors"
    SITE_SETTINGS = "site_settings"


SortSpec = list[tuple[str, int]]
