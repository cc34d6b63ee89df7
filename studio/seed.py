"""Populate the database with demo users, clients, projects, assets and variants.

Usage:
  python -m studio.seed [--reset] [--create-tables]
"""

from __future__ import annotations

import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from .core.renderer import render_svg
from .db import models
from .db.session import Base, engine, get_session
from .security import PasswordService

logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@advariants.com"
ADMIN_PASSWORD = "admin123"
USER_EMAIL = "user@example.com"
USER_PASSWORD = "user123"

_ARIAL = [{"family": "Arial", "url": "", "weight": "normal", "style": "normal"}]

BANNER_SVG = """<svg width="800" height="400" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <linearGradient id="grad1" x1="0%" y1="0%" x2="100%" y2="100%">
      <stop offset="0%" style="stop-color:#4F46E5;stop-opacity:1" />
      <stop offset="100%" style="stop-color:#7C3AED;stop-opacity:1" />
    </linearGradient>
  </defs>
  <rect width="100%" height="100%" fill="url(#grad1)"/>
  <rect x="50" y="50" width="700" height="300" rx="20" fill="rgba(255,255,255,0.1)" stroke="rgba(255,255,255,0.3)" stroke-width="2"/>
  <text x="400" y="150" text-anchor="middle" font-family="Arial, sans-serif" font-size="48" font-weight="bold" fill="white">{{headline}}</text>
  <text x="400" y="200" text-anchor="middle" font-family="Arial, sans-serif" font-size="24" fill="rgba(255,255,255,0.9)">{{subheadline}}</text>
  <rect x="320" y="250" width="160" height="50" rx="25" fill="white"/>
  <text x="400" y="280" text-anchor="middle" font-family="Arial, sans-serif" font-size="18" font-weight="bold" fill="#4F46E5">{{cta}}</text>
</svg>"""

SOCIAL_SVG = """<svg width="600" height="600" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <radialGradient id="socialGrad" cx="50%" cy="50%" r="50%">
      <stop offset="0%" style="stop-color:#EC4899;stop-opacity:1" />
      <stop offset="100%" style="stop-color:#BE185D;stop-opacity:1" />
    </radialGradient>
  </defs>
  <rect width="100%" height="100%" fill="url(#socialGrad)"/>
  <circle cx="300" cy="200" r="80" fill="rgba(255,255,255,0.2)" stroke="white" stroke-width="3"/>
  <text x="300" y="320" text-anchor="middle" font-family="Arial, sans-serif" font-size="36" font-weight="bold" fill="white">{{headline}}</text>
  <text x="300" y="370" text-anchor="middle" font-family="Arial, sans-serif" font-size="18" fill="rgba(255,255,255,0.9)">{{subheadline}}</text>
  <rect x="220" y="420" width="160" height="45" rx="22" fill="white"/>
  <text x="300" y="450" text-anchor="middle" font-family="Arial, sans-serif" font-size="16" font-weight="bold" fill="#BE185D">{{cta}}</text>
</svg>"""

PRODUCT_SVG = """<svg width="1200" height="628" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <linearGradient id="productGrad" x1="0%" y1="0%" x2="100%" y2="0%">
      <stop offset="0%" style="stop-color:#059669;stop-opacity:1" />
      <stop offset="100%" style="stop-color:#065F46;stop-opacity:1" />
    </linearGradient>
  </defs>
  <rect width="100%" height="100%" fill="url(#productGrad)"/>
  <rect x="100" y="100" width="1000" height="428" rx="30" fill="rgba(255,255,255,0.1)" stroke="rgba(255,255,255,0.3)" stroke-width="3"/>
  <text x="600" y="200" text-anchor="middle" font-family="Arial, sans-serif" font-size="64" font-weight="bold" fill="white">{{headline}}</text>
  <text x="600" y="280" text-anchor="middle" font-family="Arial, sans-serif" font-size="32" fill="rgba(255,255,255,0.9)">{{subheadline}}</text>
  <rect x="500" y="350" width="200" height="60" rx="30" fill="white"/>
  <text x="600" y="390" text-anchor="middle" font-family="Arial, sans-serif" font-size="24" font-weight="bold" fill="#059669">{{cta}}</text>
</svg>"""

# owner key, client, project, asset, variant copy
SAMPLES: List[Dict] = [
    {
        "owner": "user",
        "client": ("Acme Corporation", "Leading technology company specializing in innovative solutions"),
        "project": ("Spring 2024 Campaign", "Seasonal marketing campaign for Q2 product launches"),
        "asset": {
            "name": "Spring Banner Template",
            "template_svg": BANNER_SVG,
            "default_bindings": {
                "headline": "Spring Into Savings",
                "subheadline": "Get 30% off all products this season",
                "cta": "Shop Now",
                "image": "",
            },
            "style_hints": {
                "palette": ["#4F46E5", "#7C3AED", "#FFFFFF"],
                "brand": "Modern, tech-forward, trustworthy",
                "notes": "Use bold typography and clean gradients",
            },
        },
        "variants": [
            ("Spring Into Savings", "Get 30% off all products this season", "Shop Now"),
            ("Season of Savings", "Exclusive spring deals up to 30% off", "Get Deals"),
            ("Spring Sale Event", "Limited time offer - save big today", "Save Now"),
        ],
    },
    {
        "owner": "admin",
        "client": ("TechStart Inc", "Fast-growing startup in the fintech space"),
        "project": ("Product Launch Banners", "Digital advertising assets for new mobile app launch"),
        "asset": {
            "name": "Product Launch Hero",
            "template_svg": PRODUCT_SVG,
            "default_bindings": {
                "headline": "Revolutionary App",
                "subheadline": "Transform your workflow with our latest innovation",
                "cta": "Download Free",
                "image": "",
            },
            "style_hints": {
                "palette": ["#059669", "#065F46", "#FFFFFF"],
                "brand": "Professional, innovative, reliable",
                "notes": "Emphasize product benefits and clean design",
            },
        },
        "variants": [
            ("Revolutionary App", "Transform your workflow with our latest innovation", "Download Free"),
            ("Game-Changing Solution", "Boost productivity with cutting-edge technology", "Try Free"),
        ],
    },
    {
        "owner": "user",
        "client": ("Brand Studios", "Creative agency for lifestyle brands"),
        "project": ("Social Media Suite", "Complete social media advertising package"),
        "asset": {
            "name": "Social Media Post",
            "template_svg": SOCIAL_SVG,
            "default_bindings": {
                "headline": "Lifestyle Goals",
                "subheadline": "Discover your perfect style",
                "cta": "Explore",
                "image": "",
            },
            "style_hints": {
                "palette": ["#EC4899", "#BE185D", "#FFFFFF"],
                "brand": "Trendy, lifestyle-focused, aspirational",
                "notes": "Use vibrant colors and lifestyle imagery",
            },
        },
        "variants": [
            ("Lifestyle Goals", "Discover your perfect style", "Explore"),
            ("Style Inspiration", "Find your unique fashion voice", "Discover"),
            ("Fashion Forward", "Trendsetting looks for every occasion", "Shop Style"),
        ],
    },
]


def reset_database(session: Session) -> None:
    for model in (models.Variant, models.Asset, models.Project, models.Client, models.User):
        session.query(model).delete()
    session.flush()
    logger.info("Removed existing records")


def seed_database(session: Session, *, reset: bool = False) -> bool:
    """Insert demo data. Returns ``False`` when the database is already seeded."""

    if reset:
        reset_database(session)
    elif session.query(models.User).filter(models.User.email == ADMIN_EMAIL).first():
        logger.info("Seed data already present (%s exists); skipping", ADMIN_EMAIL)
        return False

    passwords = PasswordService()
    owners = {
        "admin": models.User(
            email=ADMIN_EMAIL,
            name="System Administrator",
            password_hash=passwords.hash(ADMIN_PASSWORD),
            role=models.Role.ADMIN,
        ),
        "user": models.User(
            email=USER_EMAIL,
            name="John Designer",
            password_hash=passwords.hash(USER_PASSWORD),
            role=models.Role.USER,
        ),
    }
    session.add_all(owners.values())
    session.flush()

    variant_count = 0
    for sample in SAMPLES:
        owner = owners[sample["owner"]]
        client = models.Client(
            name=sample["client"][0],
            description=sample["client"][1],
            created_by_user_id=owner.id,
        )
        project = models.Project(
            client=client,
            name=sample["project"][0],
            description=sample["project"][1],
            created_by_user_id=owner.id,
        )
        asset = models.Asset(
            project=project,
            template_fonts=list(_ARIAL),
            created_by_user_id=owner.id,
            **sample["asset"],
        )
        session.add_all([client, project, asset])

        for index, (headline, subheadline, cta) in enumerate(sample["variants"]):
            bindings = {"headline": headline, "subheadline": subheadline, "cta": cta, "imageUrl": ""}
            session.add(
                models.Variant(
                    asset=asset,
                    source=models.VariantSource.USER if index == 0 else models.VariantSource.AUTO,
                    bindings=bindings,
                    render_svg=render_svg(asset.template_svg, bindings, asset.default_bindings),
                    status=models.VariantStatus.READY,
                    created_by_user_id=owner.id,
                )
            )
            variant_count += 1

    session.flush()
    logger.info(
        "Seeded 2 users, %d clients, %d projects, %d assets, %d variants",
        len(SAMPLES),
        len(SAMPLES),
        len(SAMPLES),
        variant_count,
    )
    return True


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Seed the studio database with demo data")
    parser.add_argument("--reset", action="store_true", help="Delete all existing records before seeding")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (for local SQLite setups without migrations)",
    )
    args = parser.parse_args()

    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")

    if args.create_tables:
        Base.metadata.create_all(engine)

    with get_session() as session:
        created = seed_database(session, reset=args.reset)

    if created:
        print("[OK] Database seeded")
        print(f"Admin: {ADMIN_EMAIL} / {ADMIN_PASSWORD}")
        print(f"User:  {USER_EMAIL} / {USER_PASSWORD}")
    else:
        print("[INFO] Database already seeded; use --reset to start over")


if __name__ == "__main__":
    main()
