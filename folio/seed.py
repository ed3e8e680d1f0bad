"""
Seed data
=========

Creates the admin accounts plus a welcome post and a sample project.
Safe to run repeatedly: existing users are left alone and content is only
added to empty tables.

    flask --app yourapp folio-seed
"""

import os

import click
from flask.cli import with_appcontext

from .core.database import db
from .core.logging_service import LoggingService
from .modules.auth.models import User
from .modules.auth.utils import hash_password
from .modules.blogs.models import Blog
from .modules.projects.models import Project

ADMIN_USERS = [
    {
        'email': 'admin@portfolio.com',
        'name': 'Demo Admin User',
        'password_env': 'SEED_ADMIN_PASSWORD',
    },
    {
        'email': os.getenv('SEED_SUPER_ADMIN_EMAIL', 'owner@portfolio.com').lower(),
        'name': 'Site Owner',
        'password_env': 'SEED_SUPER_ADMIN_PASSWORD',
    },
]

WELCOME_BLOG = {
    'title': 'Welcome to My Portfolio',
    'slug': 'welcome-to-my-portfolio',
    'content': 'This is my first blog post. Welcome to my portfolio website!',
    'excerpt': 'Introduction to my portfolio and journey as a developer',
    'published': True,
}

SAMPLE_PROJECT = {
    'title': 'Portfolio Website',
    'slug': 'portfolio-website',
    'description': 'My personal portfolio built with Flask',
    'content': 'This project showcases my skills in web development.',
    'thumbnail': 'https://placehold.co/600x400/png',
    'project_url': 'https://yourportfolio.com',
    'github_url': 'https://github.com/yourusername/portfolio',
    'tags': [],
    'featured': True,
}


class SeedError(Exception):
    pass


def seed_users(passwords=None):
    """Create missing admin users. Returns the number created."""
    passwords = passwords or {}
    resolved = {}
    for account in ADMIN_USERS:
        password = passwords.get(account['password_env']) or os.getenv(account['password_env'])
        if not password:
            raise SeedError(f"{account['password_env']} must be set before seeding")
        resolved[account['email']] = password

    created = 0
    for account in ADMIN_USERS:
        if User.query.filter_by(email=account['email']).first():
            continue
        db.session.add(User(
            email=account['email'],
            name=account['name'],
            role='admin',
            password_hash=hash_password(resolved[account['email']]),
        ))
        created += 1
    db.session.commit()
    return created


def seed_blogs():
    if Blog.query.first() is not None:
        return 0
    db.session.add(Blog(**WELCOME_BLOG))
    db.session.commit()
    return 1


def seed_projects():
    if Project.query.first() is not None:
        return 0
    db.session.add(Project(**SAMPLE_PROJECT))
    db.session.commit()
    return 1


def seed_all(passwords=None):
    """Seed users, blogs and projects. Returns a summary of rows created."""
    summary = {
        'users': seed_users(passwords),
        'blogs': seed_blogs(),
        'projects': seed_projects(),
    }
    LoggingService.info('seed', 'Seed completed', summary)
    return summary


@click.command('folio-seed')
@with_appcontext
def seed_command():
    """Seed the database with admin users and sample content."""
    try:
        summary = seed_all()
    except SeedError as e:
        raise click.ClickException(str(e))
    click.echo(
        f"Seeded {summary['users']} users, {summary['blogs']} blogs, {summary['projects']} projects"
    )
