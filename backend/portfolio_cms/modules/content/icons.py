"""Registry of icon keys a skill may reference.

The admin UI renders each key with its own icon component; the backend
only needs to know which keys exist.
"""

ICON_KEYS: tuple[str, ...] = (
    "javascript",
    "typescript",
    "react",
    "nextjs",
    "tailwindcss",
    "redux",
    "reactquery",
    "reacthookform",
    "firebase",
    "supabase",
    "git",
    "figma",
    "antdesign",
    "shadcnui",
    "vercel",
)


def is_known_icon(key: str) -> bool:
    return key in ICON_KEYS
