from setuptools import find_namespace_packages, setup

setup(
    name="charging-profile",
    version="1.0.0",
    packages=find_namespace_packages(include=["charging_profile", "charging_profile.*"]),
    package_dir={"": "."},
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "loguru>=0.7.0",
        "prometheus-client>=0.19.0",
        "prometheus-fastapi-instrumentator>=6.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "httpx>=0.25.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "charging-profile=charging_profile.main:main",
        ],
    },
)
