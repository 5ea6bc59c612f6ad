"""Shared fixtures."""

import os

import pytest

from opencontext.config import reset_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from OPENCONTEXT_* variables set in the outer environment."""
    for name in list(os.environ):
        if name.startswith("OPENCONTEXT_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def project_tree(tmp_path):
    """A small source tree with code, tests, config and docs."""
    files = {
        "src/db/config.ts": "export function loadDatabaseConfig() {}\n",
        "src/utils/math.ts": "export const add = (a: number, b: number) => a + b;\n",
        "src/auth/middleware.ts": (
            "import { verify } from './token';\n"
            "\n"
            "// auth middleware checks the bearer token\n"
            "export function authMiddleware(req, res, next) {\n"
            "  const token = req.headers.authorization;\n"
            "  if (!verify(token)) {\n"
            "    return res.status(401).end();\n"
            "  }\n"
            "  next();\n"
            "}\n"
        ),
        "src/auth/token.ts": "export function verify(token: string) {\n  return token.length > 0;\n}\n",
        "src/auth/middleware.test.ts": "import { authMiddleware } from './middleware';\n",
        "README.md": "# Project\n\nAuth middleware docs.\n",
        ".eslintrc": "{}\n",
        "node_modules/auth/index.js": "module.exports = { auth }\n",
    }
    for relative, content in files.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return tmp_path
