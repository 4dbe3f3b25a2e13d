"""Tests for the text input and output converters."""
import pytest

from container import Container
from errors import ConfigurationError, InvalidPrefixError, ResourceReadError
from text_in import new_text_in, parse_text_lines
from text_out import new_text_out

from conftest import make_entry


@pytest.fixture
def country_dir(tmp_path):
    directory = tmp_path / "country"
    directory.mkdir()
    (directory / "de.txt").write_text("# Germany\n10.0.0.0/8\n2001:db8::/32 // v6 block\n\n")
    (directory / "fr.txt").write_text("192.168.0.0/16\n")
    (directory / ".hidden").write_text("garbage\n")
    return directory


class TestParseTextLines:
    def test_comments_and_blanks(self):
        text = "# header\n\n10.0.0.0/8\n  11.0.0.0/8   # trailing\n// comment\n1.1.1.1 extra\n"
        assert parse_text_lines(text) == ["10.0.0.0/8", "11.0.0.0/8", "1.1.1.1"]


class TestTextIn:
    def test_requires_exactly_one_source(self):
        with pytest.raises(ConfigurationError):
            new_text_in("add", {})
        with pytest.raises(ConfigurationError):
            new_text_in("add", {"uri": "a.txt", "inputDir": "dir", "name": "x"})
        with pytest.raises(ConfigurationError):
            new_text_in("add", {"uri": "a.txt"})

    def test_load_directory(self, country_dir):
        container = new_text_in("add", {"inputDir": str(country_dir)}).input(Container())
        assert sorted(e.get_name() for e in container.loop()) == ["DE", "FR"]
        assert container.get_entry("DE").marshal_text() == ["10.0.0.0/8", "2001:db8::/32"]

    def test_wanted_list_and_family(self, country_dir):
        conv = new_text_in("add", {"inputDir": str(country_dir), "wantedList": ["de"], "onlyIPType": "ipv6"})
        container = conv.input(Container())
        assert [e.get_name() for e in container.loop()] == ["DE"]
        assert container.get_entry("DE").marshal_text() == ["2001:db8::/32"]

    def test_single_file(self, country_dir):
        conv = new_text_in("add", {"name": "germany", "uri": str(country_dir / "de.txt")})
        container = conv.input(Container())
        assert container.get_entry("GERMANY").marshal_text() == ["10.0.0.0/8", "2001:db8::/32"]

    def test_remove_prefixes(self, tmp_path):
        path = tmp_path / "private.txt"
        path.write_text("10.128.0.0/9\n")
        container = Container()
        container.add(make_entry("DE", "10.0.0.0/8"))

        new_text_in("remove", {"name": "de", "uri": str(path)}).input(container)

        assert container.get_entry("DE").marshal_text() == ["10.0.0.0/9"]

    def test_missing_directory(self, tmp_path):
        conv = new_text_in("add", {"inputDir": str(tmp_path / "nope")})
        with pytest.raises(ResourceReadError):
            conv.input(Container())

    def test_invalid_line(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("10.0.0.0/8\nnot-a-cidr\n")
        conv = new_text_in("add", {"name": "bad", "uri": str(path)})
        with pytest.raises(InvalidPrefixError) as exc_info:
            conv.input(Container())
        assert "[type text | action add]" in str(exc_info.value)


class TestTextOut:
    def test_writes_one_file_per_entry(self, tmp_path):
        container = Container()
        container.add(make_entry("EU", "10.0.0.0/8", "2001:db8::/32"))
        container.add(make_entry("JP", "2001:db8:1000::/36"))

        new_text_out("output", {"outputDir": str(tmp_path / "out")}).output(container)

        assert (tmp_path / "out" / "eu.txt").read_text() == "10.0.0.0/8\n2001:db8::/32\n"
        assert (tmp_path / "out" / "jp.txt").read_text() == "2001:db8:1000::/36\n"

    def test_family_filter_skips_empty(self, tmp_path):
        container = Container()
        container.add(make_entry("EU", "10.0.0.0/8", "2001:db8::/32"))
        container.add(make_entry("JP", "2001:db8:1000::/36"))

        conv = new_text_out("output", {"outputDir": str(tmp_path), "onlyIPType": "ipv4",
                                       "outputExtension": ".list"})
        conv.output(container)

        assert (tmp_path / "eu.list").read_text() == "10.0.0.0/8\n"
        assert not (tmp_path / "jp.list").exists()

    def test_wanted_list(self, tmp_path):
        container = Container()
        container.add(make_entry("EU", "10.0.0.0/8"))
        container.add(make_entry("DE", "10.0.0.0/8"))

        new_text_out("output", {"outputDir": str(tmp_path), "wantedList": ["eu"]}).output(container)

        assert sorted(p.name for p in tmp_path.iterdir()) == ["eu.txt"]

    def test_rejects_input_action(self):
        with pytest.raises(ConfigurationError):
            new_text_out("add")

    def test_skips_entry_without_name(self, tmp_path):
        container = Container()
        container.add(make_entry("", "10.0.0.0/8"))
        container.add(make_entry("EU", "10.0.0.0/8"))

        new_text_out("output", {"outputDir": str(tmp_path)}).output(container)

        assert sorted(p.name for p in tmp_path.iterdir()) == ["eu.txt"]
