from setuptools import find_namespace_packages, setup

setup(
    name="pitch-deck-backend",
    version="0.1.0",
    package_dir={"": "backend"},
    packages=find_namespace_packages(where="backend", include=["models*", "services*", "shared*"]),
    py_modules=["app", "database"],
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.27",
        "pydantic>=2.5",
        "sqlalchemy>=2.0",
        "alembic>=1.13",
        "psycopg2-binary>=2.9",
        "python-dotenv>=1.0",
        "pyyaml>=6.0",
        "openai>=1.30",
        "python-jose[cryptography]>=3.3",
        "firebase-admin>=6.5",
    ],
    extras_require={
        "tests": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
        ],
    },
    include_package_data=True,
    package_data={"services.ai.config": ["prompts.yaml"]},
    description="Backend for the AI pitch deck generator (generation, chat editing, projects and slides)",
)
