from setuptools import find_packages, setup

PKG_NAME = "dynaccess"
about: dict = dict()
exec(open(f"{PKG_NAME}/__about__.py").read(), about)

with open("README.md") as fh:
    long_description = fh.read()


setup(
    name=PKG_NAME,
    version=about["__version__"],
    author=about["__author__"],
    author_email=about["__author_email__"],
    description="Unbounded batch gets, bulk writes and full scans over boto3's DynamoDB client, with explicit partial-failure reporting.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"": ["py.typed"]},
    python_requires=">=3.8",
    install_requires=[
        "boto3 >= 1.9",
        "botocore >= 1.12",
        "typing-extensions >= 3.7",
        "python-dotenv >= 0.19",
    ],
    extras_require={"test": ["pytest >= 6.0"]},
)
