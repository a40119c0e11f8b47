from setuptools import setup, find_packages

setup(
    name="pascalite",
    version="0.1.0",
    description="pascalite — tree-walking interpreter for a small Pascal subset",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="pascalite Project",
    python_requires=">=3.9",
    packages=find_packages(),
    entry_points={
        "console_scripts": [
            "pascalite=pascalite.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Interpreters",
    ],
)
