# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="scriptdeps",
    version="1.0.0",
    description="Discover and visualize the file dependencies of heterogeneous script collections",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["scriptdeps", "scriptdeps.*"]),
    python_requires=">=3.9",
    install_requires=[
        "anthropic[bedrock]",  # Oracle (Anthropic API or Amazon Bedrock)
        "filetype",            # Magic-number detection of binary executables
        "python-dotenv",       # Credentials from a local .env file
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'scriptdeps=scriptdeps.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
