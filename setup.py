# setup.py
from setuptools import find_packages, setup

setup(
    name="pm-report-views",
    version="0.1.0",
    packages=find_packages(include=["pm_reports", "pm_reports.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "sqlalchemy[asyncio]>=2.0",
        "asyncpg",
        "psycopg[binary]",
        "alembic",
        "pydantic>=2",
        "pydantic-settings",
        "structlog",
        "sentry-sdk",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx",
            "aiosqlite",
        ],
    },
)
