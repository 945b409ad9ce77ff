from setuptools import setup, find_packages


setup(
    name="rollcrc",
    version="0.1",
    packages=find_packages(include=["rollcrc", "rollcrc.*"]),
    description="Rolling CRC-32 over a fixed-size window of a byte stream, O(1) per byte.",
    author="vercingetorx",
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "rollcrc=rollcrc.cli:main",
        ]
    },
)
