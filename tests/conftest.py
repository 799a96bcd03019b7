"""Shared pytest fixtures for bracelint tests."""
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

import pytest
import yaml

from bracelint.infrastructure.config_manager import set_global_config
from bracelint.infrastructure.logger import set_global_logger
from bracelint.tree.nodes import AtRule, Declaration, Node, Root, Rule


@pytest.fixture
def build_rule() -> Callable[..., Rule]:
    """Factory for style rules.

    ``build_rule()`` gives ``.a {\\n  color: red;\\n}``.
    """

    def _build(
        selector: str = ".a",
        decls: Iterable[Tuple[str, str]] = (("color", "red"),),
        decl_before: str = "\n  ",
        after: Optional[str] = "\n",
        semicolon: bool = True,
        children: Sequence[Node] = (),
        before: str = "",
    ) -> Rule:
        nodes = [
            Declaration(prop, value, raws={"before": decl_before, "between": ": "})
            for prop, value in decls
        ]
        nodes.extend(children)
        raws: Dict[str, Any] = {"before": before, "between": " ", "semicolon": semicolon}
        if after is not None:
            raws["after"] = after
        return Rule(selector, nodes, raws=raws)

    return _build


@pytest.fixture
def build_at_rule() -> Callable[..., AtRule]:
    """Factory for at-rules with a block."""

    def _build(
        name: str = "media",
        params: str = "print",
        children: Sequence[Node] = (),
        after: str = "\n",
        semicolon: bool = False,
        before: str = "",
    ) -> AtRule:
        return AtRule(
            name,
            params,
            list(children),
            raws={"before": before, "between": " ", "after": after, "semicolon": semicolon},
        )

    return _build


@pytest.fixture
def build_root() -> Callable[..., Root]:
    """Factory for a root holding the given statements."""

    def _build(*statements: Node) -> Root:
        return Root(list(statements), raws={"after": "\n"})

    return _build


@pytest.fixture
def media_with_rule(build_rule, build_at_rule) -> AtRule:
    """``@media print {\\n  .a {\\n    color: red;\\n  }\\n}``"""
    inner = build_rule(decl_before="\n    ", after="\n  ", before="\n  ")
    return build_at_rule(children=[inner])


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample bracelint configuration."""
    return {
        "bracelint": {
            "fix": False,
            "newline": "\n",
            "logging": {"level": "DEBUG"},
            "rules": {
                "block-closing-brace-empty-line-before": [
                    "always-multi-line",
                    {"except": ["after-closing-brace"]},
                ],
            },
        }
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = tmp_path / ".bracelint.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep BRACELINT_* variables from the outer shell out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("BRACELINT_"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset global logger and config between tests."""
    yield
    set_global_logger(None)
    set_global_config(None)
