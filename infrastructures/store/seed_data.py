# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 启动种子数据（5 用户 / 6 类目 / 6 项目）

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import Callable

from domains.crowdfunding_domain import CategoryCreate, ProjectCreate, ProjectStatus
from domains.domain_base import utc_now
from domains.user_domain import UserCreate, UserRole
from infrastructures.store.entity_store import EntityStore
from infrastructures.vlogger import vlogger

SEED_CATEGORIES = [
    CategoryCreate(name="Technology", slug="technology", icon_name="laptop-code", color="blue",
                   description="Innovative tech solutions", project_count=124),
    CategoryCreate(name="Art & Design", slug="art-design", icon_name="palette", color="purple",
                   description="Creative and artistic projects", project_count=87),
    CategoryCreate(name="Health", slug="health", icon_name="heartbeat", color="green",
                   description="Healthcare and wellness initiatives", project_count=63),
    CategoryCreate(name="Education", slug="education", icon_name="graduation-cap", color="indigo",
                   description="Educational and learning projects", project_count=142),
    CategoryCreate(name="Environment", slug="environment", icon_name="leaf", color="teal",
                   description="Environmental sustainability projects", project_count=98),
    CategoryCreate(name="Music", slug="music", icon_name="music", color="pink",
                   description="Musical and audio projects", project_count=45),
]

_AVATAR = "https://images.unsplash.com/{}?w=100&h=100&fit=crop&crop=face"

SEED_USERS = [
    UserCreate(name="Kwame Asante", email="kwame@example.com", bio="Solar energy entrepreneur from Ghana",
               profile_image_url=_AVATAR.format("photo-1507003211169-0a1dd7228f2d")),
    UserCreate(name="Amara Kone", email="amara@example.com", bio="Tech educator and developer",
               profile_image_url=_AVATAR.format("photo-1494790108755-2616b612b0e5")),
    UserCreate(name="Jabari Ochieng", email="jabari@example.com", bio="AgriTech innovator from Kenya",
               profile_image_url=_AVATAR.format("photo-1472099645785-5658abf4ff4e")),
    UserCreate(name="Zara Mwangi", email="zara@example.com", bio="Healthcare technology specialist",
               profile_image_url=_AVATAR.format("photo-1438761681033-6461ffad8d80")),
    UserCreate(name="Kofi Mensah", email="kofi@example.com", bio="Environmental activist and engineer",
               profile_image_url=_AVATAR.format("photo-1500648767791-00dcc994a43e"), role=UserRole.admin),
]

_HERO = "https://images.unsplash.com/{}?w=800&h=400&fit=crop"

# (payload, pledged, backer_count, days_left)
SEED_PROJECTS = [
    (ProjectCreate(
        title="Solar Power for Rural Communities",
        subtitle="Bringing clean energy to remote villages across Kenya",
        description="Our innovative solar power initiative aims to provide sustainable electricity to rural "
                    "communities that have been overlooked by traditional power grids. By installing solar "
                    "panels and battery storage systems, we're empowering families with clean, reliable "
                    "energy for their homes, schools, and small businesses.",
        goal=Decimal("60000"), duration_days=45, status=ProjectStatus.live,
        hero_image_url=_HERO.format("photo-1509391366360-2e959784a276"), creator_id=1, category_id=1,
    ), Decimal("45230"), 158, 24),
    (ProjectCreate(
        title="Coding Academy for Youth",
        subtitle="Empowering young minds with digital skills",
        description="A comprehensive coding bootcamp designed specifically for African youth aged 16-25. "
                    "Our program covers web development, mobile app creation, and data science, providing "
                    "students with the skills they need to thrive in the digital economy.",
        goal=Decimal("50000"), duration_days=60, status=ProjectStatus.live,
        hero_image_url=_HERO.format("photo-1522202176988-66273c2fd55f"), creator_id=2, category_id=2,
    ), Decimal("32450"), 203, 18),
    (ProjectCreate(
        title="Smart Farming Solutions",
        subtitle="IoT-powered agriculture for sustainable growth",
        description="Revolutionary IoT sensors and mobile app system that helps farmers optimize crop yields "
                    "while conserving water and reducing pesticide use. Our technology provides real-time "
                    "data on soil moisture, temperature, and plant health.",
        goal=Decimal("40000"), duration_days=30, status=ProjectStatus.live,
        hero_image_url=_HERO.format("photo-1574323347407-f5e1ad6d020b"), creator_id=3, category_id=5,
    ), Decimal("28900"), 89, 12),
    (ProjectCreate(
        title="Mobile Health Clinic Network",
        subtitle="Bringing healthcare to underserved communities",
        description="A network of mobile health clinics equipped with telemedicine technology to provide "
                    "primary healthcare services to rural and remote areas. Each clinic will be staffed by "
                    "qualified healthcare professionals and connected to major hospitals via satellite internet.",
        goal=Decimal("75000"), duration_days=90, status=ProjectStatus.live,
        hero_image_url=_HERO.format("photo-1559757148-5c350d0d3c56"), creator_id=4, category_id=3,
    ), Decimal("21340"), 67, 35),
    (ProjectCreate(
        title="African Music Preservation Project",
        subtitle="Digitizing traditional music for future generations",
        description="A comprehensive initiative to record, digitize, and preserve traditional African music "
                    "from various ethnic groups. We're working with local musicians and cultural experts to "
                    "create a digital archive that will be accessible to researchers and music lovers worldwide.",
        goal=Decimal("25000"), duration_days=60, status=ProjectStatus.live,
        hero_image_url=_HERO.format("photo-1493225457124-a3eb161ffa5f"), creator_id=5, category_id=6,
    ), Decimal("18750"), 94, 28),
    (ProjectCreate(
        title="Clean Water Initiative",
        subtitle="Providing safe drinking water through innovative filtration",
        description="Developing and distributing low-cost, high-efficiency water filtration systems for "
                    "communities without access to clean water. Our bio-sand filters remove 99% of pathogens "
                    "and can be manufactured locally using sustainable materials.",
        goal=Decimal("35000"), duration_days=45, status=ProjectStatus.funded,
        hero_image_url=_HERO.format("photo-1541544741938-0af808871cc0"), creator_id=1, category_id=5,
    ), Decimal("42100"), 156, 7),
]


def seed_store(store: EntityStore, hash_password: Callable[[str], str], password: str) -> None:
    """Load the demo data set. Every seeded user shares `password`, each with its own salt."""
    for category in SEED_CATEGORIES:
        store.create_category(category)

    for user in SEED_USERS:
        store.create_user_with_password(user, hash_password(password))

    now = utc_now()
    total = len(SEED_PROJECTS)
    for index, (payload, pledged, backers, days_left) in enumerate(SEED_PROJECTS):
        # 依次递增 created_at，保证“最新优先”排序稳定
        created_at = now - timedelta(minutes=total - index)
        project = store.create_project(
            payload.model_copy(update={"end_date": now + timedelta(days=days_left)}),
            created_at=created_at,
        )
        store.update_project(project.id, {"pledged": pledged, "backer_count": backers})

    vlogger.info(
        "seed data loaded users=%s categories=%s projects=%s",
        len(SEED_USERS), len(SEED_CATEGORIES), total,
    )
