#!/usr/bin/env python

from setuptools import setup

setup(
    name="savedobjects-mappings",
    version="1.0.0",
    description="Build and diff the mapping of the saved objects index",
    packages=["savedobjects", "savedobjects.mappings"],
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.10",
    keywords=["elasticsearch", "mapping", "migration"],
    classifiers=[
        "License :: OSI Approved :: Apache Software License",
        "Topic :: Database",
    ],
    install_requires=[
        "elasticsearch[async]~=8.6",
        "python-dotenv",
        "pydantic>=2",
        "pydantic-settings",
        "typing-extensions",
    ],
    extras_require={
        'dev': [
            'pytest',
            'anyio',
            'mypy',
            'flake8',
        ]
    },
    entry_points={
        'console_scripts': [
            'savedobjects = savedobjects.__main__:main'
        ]
    },
)
