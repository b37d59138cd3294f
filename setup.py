"""
Setup script for Target-DNS.
"""

from setuptools import find_namespace_packages, setup

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = fh.read().splitlines()

setup(
    name="target-dns",
    version="0.1.0",
    description="Keep an internal DNS zone's A records in sync with Cloudflare infrastructure targets",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_namespace_packages(include=["target_dns", "target_dns.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=8.0", "httpx"],
    },
    entry_points={
        "console_scripts": [
            "target-dns=target_dns.__main__:main",
        ],
    },
    include_package_data=True,
)
