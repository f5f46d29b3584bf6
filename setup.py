from setuptools import setup, find_packages

setup(
    name="nextbus",
    version="0.1.0",
    description="Upcoming departures in both directions for one stop, from a OneBusAway server.",
    packages=find_packages(exclude=["tests"]),
    py_modules=["main_cli"],
    install_requires=[
        "requests",
        "pytz",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "nextbus=main_cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.7',
)
