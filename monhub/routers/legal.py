from typing import List

from fastapi import APIRouter, HTTPException
from starlette import status

from monhub.legal_content import CONTACT_EMAIL, LAST_UPDATED, LEGAL_PAGES

router = APIRouter(prefix="/legal", tags=["legal"])


def _section(number: int, section: dict) -> dict:
    return {
        "number": number,
        "title": section["title"],
        "paragraphs": section.get("paragraphs", []),
        "items": section.get("items", []),
        "facts": [{"label": k, "value": v} for k, v in section.get("facts", [])],
        "links": [{"label": k, "href": v} for k, v in section.get("links", [])],
    }


@router.get("/")
def list_legal_pages() -> List[dict]:
    return [
        {"slug": slug, "title": page["title"], "href": f"/{slug}"}
        for slug, page in LEGAL_PAGES.items()
    ]


@router.get("/{slug}")
def get_legal_page(slug: str) -> dict:
    page = LEGAL_PAGES.get(slug)
    if page is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page introuvable")
    return {
        "slug": slug,
        "title": page["title"],
        "description": page["description"],
        "last_updated": LAST_UPDATED,
        "contact_email": CONTACT_EMAIL,
        "intro": page["intro"],
        "sections": [_section(i, s) for i, s in enumerate(page["sections"], start=1)],
        "footer": page["footer"],
    }
