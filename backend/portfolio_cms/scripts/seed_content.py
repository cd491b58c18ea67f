"""Seed the hero and about singletons and sample skills/stats.

Usage:
    python -m portfolio_cms.scripts.seed_content

Existing rows are left alone, so the script is safe to run repeatedly.
The hero and about rows must exist for the admin panel to edit them.
"""

import asyncio
import sys

from sqlalchemy import func, select

from portfolio_cms.core.database import get_db_context
from portfolio_cms.modules.content.models import About, Hero, Skill, Stat

HERO_DEFAULTS = {
    "name": "Portfolio",
    "profession_en": "Frontend Developer",
    "profession_ru": "Фронтенд-разработчик",
    "profession_uz": "Frontend dasturchi",
    "description_en": "I build fast, accessible web applications.",
    "description_ru": "Я создаю быстрые и доступные веб-приложения.",
    "description_uz": "Men tez va qulay veb-ilovalar yarataman.",
    "view_projects_text_en": "View projects",
    "view_projects_text_ru": "Смотреть проекты",
    "view_projects_text_uz": "Loyihalarni ko'rish",
    "resume_text_en": "Resume",
    "resume_text_ru": "Резюме",
    "resume_text_uz": "Rezyume",
    "is_published": True,
}

ABOUT_DEFAULTS = {
    "title_en": "About me",
    "title_ru": "Обо мне",
    "title_uz": "Men haqimda",
    "description_en": "Developer focused on modern frontend tooling.",
    "description_ru": "Разработчик, работающий с современным фронтендом.",
    "description_uz": "Zamonaviy frontend vositalari bilan ishlaydigan dasturchi.",
    "location_en": "Tashkent, Uzbekistan",
    "location_ru": "Ташкент, Узбекистан",
    "location_uz": "Toshkent, O'zbekiston",
    "availability_en": "Open to work",
    "availability_ru": "Открыт к предложениям",
    "availability_uz": "Ishga tayyorman",
    "education_en": "Computer Science",
    "education_ru": "Информатика",
    "education_uz": "Informatika",
    "what_i_do_en": "What I do",
    "what_i_do_ru": "Чем я занимаюсь",
    "what_i_do_uz": "Nima qilaman",
    "service_1_en": "Web applications",
    "service_1_ru": "Веб-приложения",
    "service_1_uz": "Veb-ilovalar",
    "service_2_en": "Landing pages",
    "service_2_ru": "Лендинги",
    "service_2_uz": "Landing sahifalar",
    "service_3_en": "Admin panels",
    "service_3_ru": "Админ-панели",
    "service_3_uz": "Admin panellar",
    "service_4_en": "UI from design",
    "service_4_ru": "Вёрстка по макету",
    "service_4_uz": "Dizayn bo'yicha UI",
    "is_published": True,
}

SKILLS = [
    ("JavaScript", "javascript", "#F7DF1E", "#F0DB4F"),
    ("TypeScript", "typescript", "#3178C6", "#235A97"),
    ("React", "react", "#61DAFB", "#21A1C4"),
    ("Next.js", "nextjs", "#000000", "#434343"),
    ("Tailwind CSS", "tailwindcss", "#38BDF8", "#0EA5E9"),
    ("Git", "git", "#F05032", "#DE4C36"),
]

STATS = [
    ("2+", "Years of experience", "Года опыта", "Yillik tajriba"),
    ("20+", "Projects completed", "Завершённых проектов", "Tugallangan loyihalar"),
]


async def seed_singleton(db, model, defaults: dict) -> None:
    result = await db.execute(select(model).limit(1))
    if result.scalar_one_or_none():
        print(f"  ⏭️  {model.__name__} already exists")
        return

    db.add(model(**defaults))
    await db.flush()
    print(f"  ✅ Created {model.__name__}")


async def seed_skills(db) -> None:
    count = (await db.execute(select(func.count()).select_from(Skill))).scalar() or 0
    if count:
        print(f"  ⏭️  Skills already exist ({count})")
        return

    for index, (name, icon_key, color_from, color_to) in enumerate(SKILLS):
        db.add(
            Skill(
                name=name,
                icon_key=icon_key,
                color_from=color_from,
                color_to=color_to,
                sort_order=index,
            )
        )
    await db.flush()
    print(f"  ✅ Created {len(SKILLS)} skills")


async def seed_stats(db) -> None:
    count = (await db.execute(select(func.count()).select_from(Stat))).scalar() or 0
    if count:
        print(f"  ⏭️  Stats already exist ({count})")
        return

    for index, (number, label_en, label_ru, label_uz) in enumerate(STATS):
        db.add(
            Stat(
                number=number,
                label_en=label_en,
                label_ru=label_ru,
                label_uz=label_uz,
                sort_order=index,
            )
        )
    await db.flush()
    print(f"  ✅ Created {len(STATS)} stats")


async def main() -> int:
    """Main seeding function."""
    print("=" * 60)
    print("🌱 Seeding portfolio content")
    print("=" * 60)
    print()

    try:
        async with get_db_context() as db:
            await seed_singleton(db, Hero, HERO_DEFAULTS)
            await seed_singleton(db, About, ABOUT_DEFAULTS)
            await seed_skills(db)
            await seed_stats(db)
            await db.commit()
    except Exception as e:
        print(f"❌ Error: {e}")
        return 1

    print()
    print("✅ Done")
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
