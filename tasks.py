# type: ignore
import os

from invoke import task


@task
def venv(ctx):
    """Create the development environment with all extras installed."""
    print("Syncing development environment with uv...")
    ctx.run("uv sync --all-extras")


@task
def clean(ctx):
    """
    Remove untracked files and directories (build output, caches, local stores).
    Asks for confirmation after showing what would be deleted.
    """

    ctx.run("git clean -nfdx")

    response = (
        input("Are you sure you want to remove all untracked files? (y/n) [n]: ")
        .strip()
        .lower()
    )
    if response == "y":
        ctx.run("git clean -fdx")


@task
def lint(ctx):
    """
    Run ruff and mypy over the package and its tests.
    """
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src tests", pty=True)
    ctx.run("mypy src", pty=True)


@task
def test(ctx, keyword=None):
    """
    Run tests with coverage of the homelink package.
    """
    cmd = "pytest --cov=homelink --cov-report=term-missing"
    if keyword:
        cmd += f" -k {keyword}"
    ctx.run(cmd, pty=True)


@task
def build_package(ctx):
    """
    Build sdist and wheel into dist/.
    """

    ctx.run("rm -rf dist")
    ctx.run("uv build")


@task
def release(ctx):
    """Build the package and publish it to PyPI."""
    token = os.getenv("PYPI_TOKEN")
    if not token:
        raise ValueError("PYPI_TOKEN environment variable is not set")

    ctx.run("invoke build-package")
    ctx.run(f"uv publish --token {token}")
