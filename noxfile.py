import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]


def _install(session: nox.Session) -> None:
    """Install the project with the test extra into the nox virtualenv."""
    session.install("-e", ".[test]")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest")


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain-layer tests only (no infrastructure required)."""
    _install(session)
    session.run("pytest", "tests/ordering/domain/")


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_sql(session: nox.Session) -> None:
    """Run the suite against the SQLAlchemy stores on a SQLite file."""
    _install(session)
    session.run(
        "pytest",
        "tests/ordering/application/",
        "tests/ordering/integration/",
        env={"STORE_DATABASE_URI": f"sqlite:///{session.create_tmp()}/bookstore.db"},
    )
