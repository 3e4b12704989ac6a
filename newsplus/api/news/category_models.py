# newsplus/api/news/category_models.py
# 카테고리 표시 순서/정규화 유틸
DISPLAY_CATEGORIES = [
    ("General", "general"),
    ("Business", "business"),
    ("Entertainment", "entertainment"),
    ("Health", "health"),
    ("Science", "science"),
    ("Sports", "sports"),
    ("Technology", "technology"),
]

CATEGORY_SLUGS = {slug for _, slug in DISPLAY_CATEGORIES}


def normalize_category(category: str | None) -> str:
    slug = (category or "").strip().lower()
    if slug in CATEGORY_SLUGS:
        return slug
    if slug in ("tech", "it"):
        return "technology"
    return "general"
