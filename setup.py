#!/usr/bin/env python3
"""
Packaging for wifi-health.

Installs the ``wifihealth`` package plus the top-level ``launcher`` and
``version`` modules, and two commands:

    wifi-health      terminal report / JSON snapshot
    wifi-health-api  JSON API (Flask)
"""

from pathlib import Path
from setuptools import setup, find_packages

HERE = Path(__file__).parent

# Read version from version.py
about = {}
exec((HERE / "version.py").read_text(), about)


def read_requirements(name="requirements.txt"):
    path = HERE / name
    if not path.exists():
        return []
    lines = (line.strip() for line in path.read_text().splitlines())
    return [line for line in lines if line and not line.startswith("#")]


readme = HERE / "README.md"

setup(
    name="wifi-health",
    version=about["get_version"](),
    author="nursedude",
    description="Local Wi-Fi health diagnostics and interference scoring",
    long_description=readme.read_text() if readme.exists() else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["launcher", "version"],
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "wifi-health=launcher:main",
            "wifi-health-api=wifihealth.monitoring.web_dashboard:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Environment :: Web Environment",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: MacOS :: MacOS X",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: System :: Networking :: Monitoring",
    ],
    keywords="wifi wireless diagnostics interference snr ping dns speedtest",
    license="GPL-3.0",
    zip_safe=False,
)
