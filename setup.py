from setuptools import find_packages, setup


setup(
    name="next-link",
    version="0.1.0",
    description="Heuristic next/previous pagination link finder for HTML pages and URLs",
    long_description="Heuristic next/previous pagination link finder for HTML pages and URLs",
    long_description_content_type="text/plain",
    python_requires=">=3.9",
    packages=find_packages(include=["next_link", "next_link.*"]),
    install_requires=[
        "httpx>=0.27.0",
        "pydantic>=2.6.0",
        "beautifulsoup4>=4.12.0",
    ],
    extras_require={
        "test": ["pytest>=8.0.0"],
    },
    entry_points={
        "console_scripts": [
            "next-link=next_link.cli:main",
        ]
    },
)
