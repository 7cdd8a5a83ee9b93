import asyncio

from app.features.evaluation.models.scan_page import ScanPage
from app.platform.db.base import Base
from app.platform.db.session import SessionLocal, engine

# Scan to create; evaluate it afterwards with POST /api/v1/evaluations
DOMAIN = "test-site.com"
DATE_OF_SCAN = "2024-05-01"

PAGES = {
    "home": {
        "meta": {"title": "Test Site", "description": "A site used to try the evaluator."},
        "body": {"h1": ["Welcome"], "word_count": 180},
        "social": {"og_title": "Test Site"},
        "schema": {"json_ld": [{"@context": "https://schema.org", "@type": "WebSite"}]},
    },
    "about": {
        "meta": {"title": "Test Site"},
        "body": {"h1": [], "word_count": 40},
        "social": {},
        "schema": {},
    },
}


async def seed_data():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as session:
        for url_id, documents in PAGES.items():
            session.add(ScanPage(
                domain=DOMAIN,
                date_of_scan=DATE_OF_SCAN,
                url_id=url_id,
                page_url=f"https://{DOMAIN}/{url_id}",
                meta=documents["meta"],
                body=documents["body"],
                social=documents["social"],
                schema_data=documents["schema"],
            ))
        await session.commit()
        print(f"Fake scan added: {DOMAIN} {DATE_OF_SCAN} ({len(PAGES)} pages)")


if __name__ == "__main__":
    asyncio.run(seed_data())
