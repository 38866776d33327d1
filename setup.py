"""Setup for Deskboard.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle of the desktop dashboard:
    pip install py2app
    python setup.py py2app
"""

from setuptools import setup, find_packages

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "Deskboard",
        "CFBundleDisplayName": "Deskboard",
        "CFBundleIdentifier": "com.deskboard.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

setup(
    app=APP,
    data_files=DATA_FILES,
    options={"py2app": OPTIONS},
    name="Deskboard",
    version="0.1.0",
    description="Personal productivity dashboard: pomodoro, tasks, notes, links and weather",
    packages=find_packages(include=["deskboard", "deskboard.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6",
        "SQLAlchemy>=2.0",
        "numpy",
        "fastapi",
        "uvicorn",
        "pydantic>=2",
        "requests",
    ],
    extras_require={
        "test": ["pytest", "httpx"],
    },
    entry_points={
        "console_scripts": ["deskboard=deskboard.__main__:main"],
    },
)
