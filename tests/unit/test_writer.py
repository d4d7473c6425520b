"""Unit tests for the writer — <domain>.json files."""

from __future__ import annotations

import json
import os
import stat
import sys
from pathlib import Path

import pytest

from didforge.core.assembler import assemble
from didforge.core.did_creator import DIDCreator
from didforge.core.errors import WriteError
from didforge.core.writer import config_file_name, serialize, write_config


@pytest.fixture
def documents(configuration, stub_client):
    return assemble(configuration, DIDCreator(stub_client).create_dids(configuration))


class TestWriteConfig:
    def test_one_file_per_domain(self, tmp_path: Path, documents):
        written = write_config(tmp_path / "out", documents)

        assert [p.name for p in written] == [
            "consortium.net.json",
            "stakeholder.one.json",
            "stakeholder.two.json",
        ]
        assert sorted(p.name for p in (tmp_path / "out").iterdir()) == sorted(
            p.name for p in written
        )

    def test_creates_missing_directory(self, tmp_path: Path, documents):
        target = tmp_path / "nested" / "config"
        write_config(target, documents)
        assert (target / "consortium.net.json").is_file()

    def test_formatted_json(self, tmp_path: Path, documents):
        write_config(tmp_path, documents)
        text = (tmp_path / "stakeholder.one.json").read_text()
        assert text.startswith("{\n  ")
        data = json.loads(text)
        assert data["domain"] == "stakeholder.one"
        assert data["did"] == "did:test:stakeholder.one"

    def test_absent_policy_fields_omitted(self, tmp_path: Path, documents):
        write_config(tmp_path, documents)
        data = json.loads((tmp_path / "stakeholder.one.json").read_text())
        assert data["policy"] == {"cache": {"max_age": 604800}}

    def test_overwrites_existing_file(self, tmp_path: Path, documents):
        (tmp_path / "consortium.net.json").write_text("stale")
        write_config(tmp_path, documents)
        assert json.loads((tmp_path / "consortium.net.json").read_text())["domain"] == (
            "consortium.net"
        )

    def test_no_temporary_files_left(self, tmp_path: Path, documents):
        write_config(tmp_path, documents)
        assert not [p for p in tmp_path.iterdir() if p.name.endswith(".tmp")]

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX file modes")
    def test_files_readable_under_umask(self, tmp_path: Path, documents):
        previous = os.umask(0o022)
        try:
            write_config(tmp_path / "out", documents)
        finally:
            os.umask(previous)
        for path in (tmp_path / "out").iterdir():
            assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_empty_mapping(self, tmp_path: Path):
        assert write_config(tmp_path, {}) == []


class TestWriteErrors:
    def test_domain_with_separator(self, tmp_path: Path, documents):
        consortium = documents["consortium.net"]
        with pytest.raises(WriteError) as info:
            write_config(tmp_path / "out", {"../escape": consortium})
        assert info.value.domain == "../escape"
        assert not (tmp_path / "out").exists()

    def test_destination_is_a_file(self, tmp_path: Path, documents):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(WriteError, match="consortium.net"):
            write_config(blocker, documents)

    def test_stops_at_first_failure(self, tmp_path: Path, documents):
        # The first document lands; the second fails; nothing is rolled back.
        items = list(documents.items())
        ordered = {items[0][0]: items[0][1], "..": items[1][1], items[2][0]: items[2][1]}
        with pytest.raises(WriteError):
            write_config(tmp_path / "out", ordered)
        assert [p.name for p in (tmp_path / "out").iterdir()] == ["consortium.net.json"]


class TestHelpers:
    def test_file_name_is_verbatim(self):
        assert config_file_name("stakeholder.one") == "stakeholder.one.json"

    def test_serialize_ends_with_newline(self, documents):
        assert serialize(documents["consortium.net"]).endswith(b"}\n")
