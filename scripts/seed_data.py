#!/usr/bin/env python3
"""
Seed script: tag groups, suggested tags and a few tagged posts.

Запуск (сервер должен быть поднят):
    python scripts/seed_data.py
"""

import requests

API_URL = "http://localhost:8000/api/v1"
API_KEY = "dev-api-key-change-in-production"
HEADERS = {"X-API-Key": API_KEY, "Content-Type": "application/json"}

GROUPS = ["Topics", "Regions"]

# Предлагаемые теги не удаляются сборщиком неиспользуемых тегов
SUGGESTED_TAGS = [
    {"name": "Travel", "group": "topics", "suggest": True},
    {"name": "Cooking", "group": "topics", "suggest": True},
    {"name": "Europe", "group": "regions", "suggest": True},
    {"name": "Asia", "group": "regions", "suggest": True},
]

TRANSLATIONS = {
    "travel": [{"locale": "de", "name": "Reisen"}, {"locale": "fr", "name": "Voyage"}],
    "cooking": [{"locale": "de", "name": "Kochen"}],
}

POSTS = [
    {"title": "Weekend in Lisbon", "tag_names": ["Travel", "Europe", "Food"]},
    {"title": "Pad Thai at home", "tag_names": ["Cooking", "Asia", "Food"]},
    {"title": "Packing list", "tag_names": ["Travel"]},
    {"title": "Sourdough notes", "tag_names": ["Cooking", "Baking"]},
]


def post(path, payload):
    """POST to the API; returns JSON or None (error is printed)."""
    response = requests.post(f"{API_URL}{path}", headers=HEADERS, json=payload)
    if response.status_code in (200, 201):
        return response.json()
    print(f"Error POST {path}: {response.text}")
    return None


def main():
    print("=" * 60)
    print("Seeding tagging service")
    print("=" * 60)

    print("\nCreating tag groups...")
    for name in GROUPS:
        group = post("/tag-groups", {"name": name})
        if group:
            print(f"  + {group['name']} ({group['slug']})")

    print("\nCreating suggested tags...")
    tag_ids = {}
    for tag_data in SUGGESTED_TAGS:
        tag = post("/tags", tag_data)
        if tag:
            tag_ids[tag["slug"]] = tag["id"]
            print(f"  + {tag['name']} (id={tag['id']})")

    print("\nAdding translations...")
    for slug, translations in TRANSLATIONS.items():
        if slug not in tag_ids:
            print(f"  ! Tag {slug} not found, skipping translations")
            continue
        for translation in translations:
            if post(f"/tags/{tag_ids[slug]}/translations", translation):
                print(f"  + {slug} [{translation['locale']}] {translation['name']}")

    print("\nCreating posts...")
    total_posts = 0
    for post_data in POSTS:
        created = post("/posts", post_data)
        if created:
            total_posts += 1
            print(f"  + {created['title']}: {', '.join(created['tags'])}")

    print("\n" + "=" * 60)
    print(f"Done! Created {len(tag_ids)} suggested tags and {total_posts} posts")
    print("=" * 60)


if __name__ == "__main__":
    main()
