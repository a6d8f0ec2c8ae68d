from __future__ import annotations

CACHE_PREFIX = "psyrang-planner"
CACHE_VERSION = "1.1"

PRECACHE_URLS: tuple[str, ...] = (
    "/",
    "/index.html",
    "/manifest.json",
    "https://cdn.tailwindcss.com",
    "https://unpkg.com/react@18/umd/react.development.js",
    "https://unpkg.com/react-dom@18/umd/react-dom.development.js",
    "https://unpkg.com/@babel/standalone/babel.min.js",
    "https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap",
    "https://www.psyrang.com/wp-content/uploads/2023/10/logo-192.png",
    "https://www.psyrang.com/wp-content/uploads/2023/10/logo-512.png",
)


def cache_name(version: str = CACHE_VERSION) -> str:
    return f"{CACHE_PREFIX}-v{version}"
