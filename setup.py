from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="folio",
    version="0.1.0",
    author="Folio Contributors",
    author_email="your.email@example.com",
    description="Flask backend for a personal portfolio site: blog and project APIs, JWT admin auth, uploads and contact email",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/folio",
    packages=find_packages(include=["folio", "folio.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: Flask",
    ],
    python_requires=">=3.9",
    install_requires=[
        "Flask>=3.0.0",
        "Flask-SQLAlchemy>=3.1.0",
        "SQLAlchemy>=2.0",
        "Flask-CORS>=4.0.0",
        "python-dotenv>=1.0.0",
        "cloudinary>=1.36.0",
        "resend>=2.0.0",
        "python-jose[cryptography]>=3.3.0",
        "passlib[argon2]>=1.7.4",
        "click>=8.0",
    ],
    extras_require={
        "postgres": [
            "psycopg2-binary>=2.9",
        ],
        "dev": [
            "pytest>=7.0",
            "pytest-flask>=1.2",
            "black>=22.0",
            "flake8>=5.0",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
