from setuptools import setup, find_packages

setup(
    name="watch-notify",
    version="0.1.0",
    description="In-process publish/subscribe observer registry",
    author="Mudakka",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.7.1",
        "python-dotenv>=1.0.1",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
