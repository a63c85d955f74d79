"""Unit tests for commit message generators."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from git_destination.git.commit_message import (
    ORIGIN_REFERENCE_FIELD,
    DefaultCommitGenerator,
    GerritCommitGenerator,
)
from git_destination.git.factory import CommitGeneratorFactory
from git_destination.git.repository import GitRepository


@pytest.mark.parametrize("summary", ["update", "", "first line\n\nsecond paragraph\n", "a\nb"])
def test_default_message_ends_with_origin_trailer(summary: str) -> None:
    repo = Mock(spec=GitRepository)

    message = DefaultCommitGenerator().message(summary, repo, "src-43")

    assert message.splitlines()[-1] == "OriginRef: src-43"
    assert message.startswith(summary)


def test_default_message_does_not_touch_repository() -> None:
    repo = Mock(spec=GitRepository)

    assert DefaultCommitGenerator().message("update", repo, "R") == "update\nOriginRef: R\n"
    assert repo.method_calls == []


def test_origin_field_label() -> None:
    assert ORIGIN_REFERENCE_FIELD == "OriginRef"


def test_gerrit_message_keeps_origin_trailer_last() -> None:
    repo = Mock(spec=GitRepository)
    repo.write_tree.return_value = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

    message = GerritCommitGenerator().message("update", repo, "src-43")
    lines = message.splitlines()

    assert lines[0] == "update"
    assert lines[-1] == "OriginRef: src-43"
    assert lines[-2].startswith("Change-Id: I")
    assert len(lines[-2]) == len("Change-Id: I") + 40
    repo.write_tree.assert_called_once_with()


def test_gerrit_change_id_is_stable_for_same_input() -> None:
    repo = Mock(spec=GitRepository)
    repo.write_tree.return_value = "abc"
    generator = GerritCommitGenerator()

    first = generator.message("update", repo, "src-43")
    second = generator.message("update", repo, "src-43")
    other = generator.message("update", repo, "src-44")

    assert first == second
    assert first.splitlines()[-2] != other.splitlines()[-2]


def test_factory_creates_generators() -> None:
    assert isinstance(CommitGeneratorFactory.create("default"), DefaultCommitGenerator)
    assert isinstance(CommitGeneratorFactory.create("gerrit"), GerritCommitGenerator)


def test_factory_rejects_unknown_generator() -> None:
    with pytest.raises(ValueError, match="Unsupported commit generator"):
        CommitGeneratorFactory.create("squash")


def test_generator_repr() -> None:
    assert repr(DefaultCommitGenerator()) == "DefaultCommitGenerator()"
