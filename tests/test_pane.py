"""Unit tests for pane decoding."""

import json
from pathlib import Path

import pytest

from airmux.core.decoder import decode
from airmux.core.errors import DecodeError
from airmux.schemas.fields import DECODE_CONTEXT
from airmux.schemas.pane import Pane
from airmux.schemas.split import PaneSplit


def decode_pane(data):
    return Pane.model_validate(data, context=DECODE_CONTEXT)


def pane_error(pane) -> str:
    """Decode a project holding a single pane and return the decode error message."""
    text = json.dumps({"windows": [{"panes": [pane]}]})
    with pytest.raises(DecodeError) as exc_info:
        decode(text)
    return str(exc_info.value)


def yaml_error(text: str) -> str:
    with pytest.raises(DecodeError) as exc_info:
        decode(text)
    return str(exc_info.value)


class TestPaneShapes:
    """Test the accepted pane shapes."""

    def test_null_is_default(self):
        """Test that null decodes to the default pane."""
        assert decode_pane(None) == Pane()

    def test_string_is_single_command(self):
        """Test that a bare string is the pane's only command."""
        pane = decode_pane("echo hello")
        assert pane.commands == ["echo hello"]
        assert pane == Pane(commands=["echo hello"])

    def test_command_list(self):
        """Test that a list of strings is the pane's command list."""
        assert decode_pane(["a", "b #1"]).commands == ["a", "b ##1"]

    def test_attributed_map(self):
        """Test the attributed form with aliases."""
        pane = decode_pane(
            {
                "root": "/tmp",
                "split": "v",
                "split_from": 0,
                "split_size": 50,
                "clear": True,
                "on_create": "echo created",
                "post_create": ["echo done"],
                "command": "ls",
            }
        )
        assert pane.name is None
        assert pane.working_dir == Path("/tmp")
        assert pane.split is PaneSplit.VERTICAL
        assert pane.split_from == 0
        assert pane.split_size == "50"
        assert pane.clear is True
        assert pane.on_create == ["echo created"]
        assert pane.post_create == ["echo done"]
        assert pane.commands == ["ls"]

    def test_attributed_map_with_name(self):
        """Test that name and its title alias set the name."""
        assert decode_pane({"title": "logs", "commands": "tail -f log"}).name == "logs"
        assert decode_pane({"commands": "ls", "name": "files"}).name == "files"

    def test_split_size_percentage_kept(self):
        """Test that a percentage split size is used verbatim."""
        assert decode_pane({"split_size": "30%"}).split_size == "30%"

    def test_clear_from_number(self):
        """Test that numbers decode to clear when non-zero."""
        assert decode_pane({"clear": 1}).clear is True
        assert decode_pane({"clear": 0}).clear is False

    def test_null_fields(self):
        """Test the null policy of each pane field."""
        pane = decode_pane(
            {"name": None, "split": None, "split_size": None, "clear": None, "commands": None}
        )
        assert pane == Pane()


class TestNamePrefixedPane:
    """Test the name-prefixed form, where an unknown first key names the pane."""

    def test_name_with_command(self):
        """Test a name followed by a single command."""
        pane = decode_pane({"my pane": "ls"})
        assert pane == Pane(name="my pane", commands=["ls"])

    def test_name_with_null(self):
        """Test a name with no commands."""
        assert decode_pane({"my pane": None}) == Pane(name="my pane")

    def test_name_with_command_list(self):
        """Test a name followed by a command list."""
        assert decode_pane({"build": ["make", "make test"]}).commands == ["make", "make test"]

    def test_name_with_definition(self):
        """Test a name followed by an attributed map."""
        pane = decode_pane({"monitor": {"split": "h", "commands": "top"}})
        assert pane.name == "monitor"
        assert pane.split is PaneSplit.HORIZONTAL
        assert pane.commands == ["top"]

    def test_definition_name_wins(self):
        """Test that a name inside the definition overrides the key."""
        assert decode_pane({"key": {"name": "inner"}}).name == "inner"

    def test_known_fields_after_name(self):
        """Test that recognized fields may follow the name entry."""
        pane = decode_pane({"editor": "vim", "clear": True, "split": "v"})
        assert pane.name == "editor"
        assert pane.commands == ["vim"]
        assert pane.clear is True
        assert pane.split is PaneSplit.VERTICAL

    def test_recognized_first_key_is_not_a_name(self):
        """Test that a recognized key in first position sets its field."""
        pane = decode_pane({"commands": "ls", "clear": True})
        assert pane.name is None
        assert pane.commands == ["ls"]

    def test_null_key_has_no_name(self):
        """Test that a null first key decodes its value without a name."""
        project = decode("windows:\n  - panes:\n      - ~: htop\n        clear: true\n")
        pane = project.windows[0].panes[0]
        assert pane == Pane(commands=["htop"], clear=True)


class TestPaneErrors:
    """Test pane decode errors and their messages."""

    def test_clear_string(self):
        """Test that a string clear value names field and category."""
        assert pane_error({"clear": "yes"}) == 'pane field "clear" cannot be a string'

    def test_second_unknown_key_named(self):
        """Test that the second unknown key is reported, not the first."""
        assert pane_error({"my pane": "ls", "other": 1}) == 'pane field "other" cannot be a number'

    @pytest.mark.parametrize(
        "value,category",
        [
            (None, "null"),
            ("x", "a string"),
            (True, "a boolean"),
            (["a"], "a command list"),
            ([1], "a list"),
            ({"a": 1}, "a pane definition"),
        ],
    )
    def test_second_unknown_key_categories(self, value, category):
        """Test the category named for each shape under a later unknown key."""
        message = pane_error({"my pane": "ls", "other": value})
        assert message == f'pane field "other" cannot be {category}'

    def test_null_key_after_first(self):
        """Test that a null key is only allowed first."""
        message = yaml_error("windows:\n  - panes:\n      - clear: true\n        ~: ls\n")
        assert message == "null name can only be set as first element of the map"

    def test_boolean_pane(self):
        """Test that a boolean pane is rejected."""
        assert pane_error(True) == "invalid value for pane: true"

    def test_number_under_null_key(self):
        """Test that a number under a null key is rejected."""
        message = yaml_error("windows:\n  - panes:\n      - ~: 3\n")
        assert message == "invalid value for pane: 3"

    def test_name_with_number(self):
        """Test that a name followed by a number is rejected."""
        assert pane_error({"my pane": 3}) == 'pane field "my pane" cannot be a number'

    def test_unknown_field_in_definition(self):
        """Test that a name-prefixed definition is a closed map."""
        assert pane_error({"p": {"bogus": 1}}) == 'unknown pane field "bogus"'

    def test_commands_map(self):
        """Test that a recognized key with a map value names that key."""
        assert pane_error({"commands": {"a": 1}}) == 'pane field "commands" cannot be a pane definition'

    def test_bad_split(self):
        """Test that a bad split value reports the vocabulary."""
        assert "v|h|vertical|horizontal" in pane_error({"split": "diagonal"})

    def test_negative_split_from(self):
        """Test that split_from cannot be negative."""
        assert pane_error({"split_from": -1}) == 'pane field "split_from" cannot be a negative number'

    def test_split_size_boolean(self):
        """Test that split_size cannot be a boolean."""
        assert pane_error({"split_size": False}) == 'pane field "split_size" cannot be a boolean'


class TestPaneConstruction:
    """Test building panes in code."""

    def test_from_commands(self):
        """Test the command shortcut escapes like decoding does."""
        assert Pane.from_commands("echo #", "ls") == Pane(commands=["echo ##", "ls"])

    def test_direct_construction_not_escaped(self):
        """Test that values given in code are taken as already decoded."""
        assert Pane(commands=["echo ##"]).commands == ["echo ##"]

    def test_frozen(self):
        """Test that panes cannot be mutated."""
        pane = Pane()
        with pytest.raises(Exception):
            pane.clear = True
