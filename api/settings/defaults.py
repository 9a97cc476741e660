"""
Site setting catalogue: categories, default values, and which keys are
mirrored to environment variables for payment/map providers.
"""

from __future__ import annotations

from typing import Any

DEFAULT_SETTINGS: dict[str, dict[str, Any]] = {
    "general": {
        "logo": "",
        "favicon": "",
        "site_name": "My Property Site",
        "site_email": "info@example.com",
        "currency_sign": "AED",
        "google_map_key": "",
        "recaptcha_key": "",
        "recaptcha_secret": "",
        "site_description": "",
        "site_keywords": "",
    },
    "footer": {
        "newsletter_enable": True,
        "address_enable": True,
        "address_text": "",
        "telephone_enable": True,
        "telephone_text": "",
        "footer_text": "",
        "copyright_text": "© 2024 All Rights Reserved",
        "widget_col1_enable": True,
        "widget_col1_heading": "",
        "widget_col1_content": "",
        "widget_col2_enable": True,
        "widget_col2_heading": "",
        "widget_col2_content": "",
        "widget_col3_enable": True,
        "widget_col3_heading": "",
        "widget_col3_content": "",
        "widget_col4_enable": True,
        "widget_col4_heading": "Footer Bottom Links",
        "widget_col4_content": "",
    },
    "layout": {
        "title_bg_image": "",
        "default_map_latitude": "25.2048",
        "default_map_longitude": "55.2708",
        "home_page": "default",
        "properties_page": "default",
        "featured_properties_page": "default",
        "sale_properties_page": "default",
        "rent_properties_page": "default",
        "pagination_limit": 10,
    },
    "payment": {
        "featured_property_price": "0",
        "stripe_currency": "AED",
        "stripe_key": "",
        "stripe_secret": "",
        "paypal_email": "",
        "paypal_client_id": "",
        "paypal_secret": "",
        "bank_payment_details": "",
    },
    "social": {
        "facebook_url": "",
        "twitter_url": "",
        "linkedin_url": "",
        "gplus_url": "",
        "instagram_url": "",
        "youtube_url": "",
    },
    "addthis_disqus": {
        "addthis_code": "",
        "disqus_code": "",
    },
    "about": {
        "about_title": "About Us",
        "about_description": "",
    },
    "contact": {
        "contact_title": "Contact Us",
        "contact_map_latitude": "25.2048",
        "contact_map_longitude": "55.2708",
        "contact_email": "",
        "contact_phone": "",
        "contact_address": "",
    },
    "other": {
        "maintenance_mode": False,
        "user_registration": True,
        "email_verification": True,
        "header_code": "",
        "footer_code": "",
        "items_per_page": 10,
    },
}

CATEGORIES: tuple[str, ...] = tuple(DEFAULT_SETTINGS)

PUBLIC_CATEGORIES = frozenset({"general", "social", "footer", "contact", "about"})

# Setting key -> environment variable written to the mirrored .env file.
ENV_SETTINGS: dict[str, str] = {
    "google_map_key": "GOOGLE_MAP_KEY",
    "recaptcha_key": "RECAPTCHA_SITE_KEY",
    "recaptcha_secret": "RECAPTCHA_SECRET_KEY",
    "stripe_key": "STRIPE_PUBLISHABLE_KEY",
    "stripe_secret": "STRIPE_SECRET_KEY",
    "paypal_email": "PAYPAL_EMAIL",
    "paypal_client_id": "PAYPAL_CLIENT_ID",
    "paypal_secret": "PAYPAL_SECRET",
}

MAINTENANCE_CATEGORY = "other"
MAINTENANCE_KEY = "maintenance_mode"


def is_secret_key(key: str) -> bool:
    return key.endswith("_secret")


def is_public(category: str, key: str) -> bool:
    return category in PUBLIC_CATEGORIES and not is_secret_key(key)


def setting_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return "text"


def serialize(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def deserialize(raw: str | None, kind: str) -> Any:
    """
    Turn a stored text value back into its typed form.
    """
    if kind == "boolean":
        return (raw or "").strip().lower() in {"1", "true", "yes", "on"}
    if kind == "number":
        text = (raw or "").strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            try:
                return float(text)
            except ValueError:
                return 0
    return raw if raw is not None else ""
