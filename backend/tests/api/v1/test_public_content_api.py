"""API tests for public content endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from tests.fixtures.db import make_result
from tests.fixtures.factories import (
    AboutFactory,
    HeroFactory,
    ProjectFactory,
    ProjectLocaleFactory,
    SkillFactory,
    StatFactory,
)


class TestPublicProjects:
    @pytest.mark.asyncio
    async def test_invalid_locale(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/public/projects", params={"locale": "fr"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid locale"}

    @pytest.mark.asyncio
    async def test_legacy_path_rejects_invalid_locale(self, client: AsyncClient) -> None:
        response = await client.get("/api/projects", params={"locale": "de"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid locale"}

    @pytest.mark.asyncio
    async def test_empty_locale_means_english(
        self, client: AsyncClient, mock_db: AsyncMock
    ) -> None:
        project = ProjectFactory(locales=[ProjectLocaleFactory(locale="en", title="Portfolio")])
        mock_db.execute.return_value = make_result(items=[project])

        response = await client.get("/api/projects", params={"locale": ""})

        assert response.status_code == 200
        assert response.json()["projects"][0]["title"] == "Portfolio"

    @pytest.mark.asyncio
    async def test_missing_translation_falls_back(
        self, client: AsyncClient, mock_db: AsyncMock
    ) -> None:
        project = ProjectFactory(
            live_url="https://shop.example.com",
            github_url=None,
            tech=["React"],
            locales=[
                ProjectLocaleFactory(locale="en", title="Portfolio", description="Site"),
                ProjectLocaleFactory(locale="ru", title="", description="Сайт"),
            ],
        )
        mock_db.execute.return_value = make_result(items=[project])

        response = await client.get("/api/v1/public/projects", params={"locale": "ru"})

        assert response.status_code == 200
        item = response.json()["projects"][0]
        assert item == {
            "id": str(project.id),
            "title": "Portfolio",
            "description": "Сайт",
            "image": project.image_url,
            "tech": ["React"],
            "liveUrl": "https://shop.example.com",
            "githubUrl": None,
        }

    @pytest.mark.asyncio
    async def test_only_published_are_queried(
        self, client: AsyncClient, mock_db: AsyncMock
    ) -> None:
        await client.get("/api/v1/public/projects")

        assert "is_published" in str(mock_db.execute.call_args.args[0])


class TestPublicSections:
    @pytest.mark.asyncio
    async def test_unpublished_hero_is_null(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/public/hero", params={"locale": "uz"})

        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_hero_resolves_locale(self, client: AsyncClient, mock_db: AsyncMock) -> None:
        hero = HeroFactory(profession_uz="", resume_url="http://localhost:9000/resumes/resumes/cv.pdf")
        mock_db.execute.return_value = make_result(scalar=hero)

        response = await client.get("/api/v1/public/hero", params={"locale": "uz"})

        data = response.json()
        assert data["profession"] == hero.profession_en
        assert data["resume_text"] == "Rezyume"
        assert data["resume_url"].endswith("cv.pdf")

    @pytest.mark.asyncio
    async def test_about_services(self, client: AsyncClient, mock_db: AsyncMock) -> None:
        mock_db.execute.return_value = make_result(scalar=AboutFactory())

        response = await client.get("/api/v1/public/about", params={"locale": "ru"})

        data = response.json()
        assert data["title"] == "Обо мне"
        assert data["services"] == [
            "Веб-приложения",
            "Лендинги",
            "Админ-панели",
            "Вёрстка по макету",
        ]

    @pytest.mark.asyncio
    async def test_skills(self, client: AsyncClient, mock_db: AsyncMock) -> None:
        skill = SkillFactory(name="Git", icon_key="git")
        mock_db.execute.return_value = make_result(items=[skill])

        response = await client.get("/api/v1/public/skills")

        assert response.json()["skills"][0]["icon_key"] == "git"

    @pytest.mark.asyncio
    async def test_stats_labels(self, client: AsyncClient, mock_db: AsyncMock) -> None:
        mock_db.execute.return_value = make_result(items=[StatFactory(label_ru="")])

        response = await client.get("/api/v1/public/stats", params={"locale": "ru"})

        assert response.json()["stats"][0]["label"] == "Years of experience"
