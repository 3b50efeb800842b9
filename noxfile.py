"""Nox sessions for testing and quality assurance."""

import nox

PYTHON_VERSIONS = ["3.13", "3.14"]


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the full test suite with coverage reporting.

    Args:
        session: The nox session object.
    """
    session.install("-e", ".[test]")
    session.run(
        "pytest",
        "--cov=datausage_settings",
        "--cov-report=term-missing:skip-covered",
        "--cov-fail-under=85",
        *session.posargs,
    )


@nox.session(python=PYTHON_VERSIONS[0])
def unit(session: nox.Session) -> None:
    """Run only the fast unit tests.

    Args:
        session: The nox session object.
    """
    session.install("-e", ".[test]")
    session.run("pytest", "-m", "unit", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[0])
def lint(session: nox.Session) -> None:
    """Run ruff linting and formatting checks.

    Args:
        session: The nox session object.
    """
    session.install("ruff")
    session.run("ruff", "check", ".")
    session.run("ruff", "format", "--check", ".")


@nox.session(python=PYTHON_VERSIONS[0])
def typecheck(session: nox.Session) -> None:
    """Run basedpyright over sources and tests.

    Args:
        session: The nox session object.
    """
    session.install("-e", ".[test]", "basedpyright")
    session.run("basedpyright")


@nox.session(python=PYTHON_VERSIONS[0], name="format")
def format_code(session: nox.Session) -> None:
    """Auto-format code with ruff.

    Args:
        session: The nox session object.
    """
    session.install("ruff")
    session.run("ruff", "check", ".", "--fix")
    session.run("ruff", "format", ".")


@nox.session(python=False)
def check_purity(session: nox.Session) -> None:
    """Check that the evaluation layer performs no I/O.

    core/ and types/ may only reach the platform through the query
    protocols; the snapshot adapter and CLI are the only I/O boundaries.

    Args:
        session: The nox session object.
    """
    session.run("python3", "scripts/check_core_purity.py", external=True)
