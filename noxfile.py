from __future__ import annotations

import nox


@nox.session(python="3.12")
def tests(session: nox.Session) -> None:
    session.install("-e", ".[test]")
    session.run("pytest", "-q", *session.posargs)


@nox.session(python=["3.10", "3.11"])
def compat(session: nox.Session) -> None:
    session.install("-e", ".[test]")
    session.run("pytest", "-q", "tests/unit/compat", *session.posargs)


# Alias with version suffix for CI convenience
@nox.session(name="tests-3.12", python="3.12")
def tests_312(session: nox.Session) -> None:
    tests(session)
