"""Unit tests for window decoding."""

import json
from pathlib import Path

import pytest

from airmux.core.decoder import decode
from airmux.core.errors import DecodeError
from airmux.schemas.fields import DECODE_CONTEXT
from airmux.schemas.pane import Pane
from airmux.schemas.split import PaneSplit
from airmux.schemas.window import Window


def decode_window(data):
    return Window.model_validate(data, context=DECODE_CONTEXT)


def window_error(window) -> str:
    """Decode a project holding a single window and return the decode error message."""
    with pytest.raises(DecodeError) as exc_info:
        decode(json.dumps({"windows": [window]}))
    return str(exc_info.value)


class TestWindowShapes:
    """Test the accepted window shapes."""

    def test_null_is_default(self):
        """Test that null is one window with one default pane."""
        window = decode_window(None)
        assert window == Window()
        assert window.panes == [Pane()]

    def test_string_is_single_pane(self):
        """Test that a bare string is one pane running that command."""
        window = decode_window("echo hello")
        assert window.panes == [Pane(commands=["echo hello"])]
        assert window.name is None

    def test_command_list_is_one_pane_per_command(self):
        """Test that a list of strings gives one pane per command."""
        window = decode_window(["vim", "git status"])
        assert window.panes == [Pane(commands=["vim"]), Pane(commands=["git status"])]

    def test_list_of_pane_shapes(self):
        """Test that a list may mix every pane shape."""
        window = decode_window(["ls", None, {"split": "v", "commands": "top"}, {"logs": "tail -f x"}])
        assert len(window.panes) == 4
        assert window.panes[1] == Pane()
        assert window.panes[2].split is PaneSplit.VERTICAL
        assert window.panes[3].name == "logs"

    def test_attributed_map_with_aliases(self):
        """Test the attributed form and its aliases."""
        window = decode_window(
            {
                "title": "editor",
                "root": "/tmp",
                "layout": "tiled",
                "pre": "source env",
                "on_create": "echo window",
                "on_pane_create": "echo pane",
                "post_pane_create": "echo after",
                "panes": ["a", "b"],
            }
        )
        assert window.name == "editor"
        assert window.working_dir == Path("/tmp")
        assert window.layout == "tiled"
        assert window.pane_commands == ["source env"]
        assert window.on_create == ["echo window"]
        assert window.on_pane_create == ["echo pane"]
        assert window.post_pane_create == ["echo after"]
        assert len(window.panes) == 2

    def test_pane_command_alias(self):
        """Test the pane_command alias."""
        assert decode_window({"pane_command": "nvm use"}).pane_commands == ["nvm use"]

    def test_single_pane_shape_in_panes(self):
        """Test that panes accepts a single pane shape."""
        assert decode_window({"panes": "ls"}).panes == [Pane(commands=["ls"])]
        assert decode_window({"panes": {"split": "h"}}).panes == [Pane(split=PaneSplit.HORIZONTAL)]

    @pytest.mark.parametrize("panes", [None, []])
    def test_empty_panes_is_one_default_pane(self, panes):
        """Test that null or empty panes gives one default pane."""
        assert decode_window({"panes": panes}).panes == [Pane()]

    def test_numeric_name(self):
        """Test that a numeric name is kept as text."""
        assert decode_window({"name": 3}).name == "3"


class TestNamePrefixedWindow:
    """Test the name-prefixed window form."""

    def test_name_with_command(self):
        """Test a name followed by a command."""
        window = decode_window({"editor": "vim"})
        assert window.name == "editor"
        assert window.panes == [Pane(commands=["vim"])]

    def test_name_with_null(self):
        """Test a name with the default pane."""
        assert decode_window({"shell": None}) == Window(name="shell")

    def test_name_with_pane_list(self):
        """Test a name followed by a list of pane shapes."""
        window = decode_window({"dev": ["npm start", {"split": "h", "commands": "npm test"}]})
        assert window.name == "dev"
        assert window.panes[0].commands == ["npm start"]
        assert window.panes[1].split is PaneSplit.HORIZONTAL

    def test_name_with_definition(self):
        """Test a name followed by an attributed map."""
        window = decode_window({"dev": {"layout": "main-vertical", "panes": ["vim", "ls"]}})
        assert window.name == "dev"
        assert window.layout == "main-vertical"
        assert len(window.panes) == 2

    def test_known_fields_after_name(self):
        """Test that recognized fields may follow the name entry."""
        window = decode_window({"dev": "vim", "layout": "tiled"})
        assert window.name == "dev"
        assert window.layout == "tiled"

    def test_pane_key_is_a_name(self):
        """Test that a leading pane key names the window."""
        window = decode("windows:\n  - pane: echo hi\n").windows[0]
        assert window.name == "pane"
        assert window.panes == [Pane(commands=["echo hi"])]

    def test_yaml_document(self):
        """Test a typical document mixing every window shape."""
        project = decode(
            "windows:\n"
            "  - htop\n"
            "  - editor: vim\n"
            "  - logs:\n"
            "      - tail -f a.log\n"
            "      - tail -f b.log\n"
            "  - name: server\n"
            "    panes: npm start\n"
        )
        assert [window.name for window in project.windows] == [None, "editor", "logs", "server"]
        assert len(project.windows[2].panes) == 2


class TestWindowErrors:
    """Test window decode errors and their messages."""

    def test_clear_panes_is_not_a_window_field(self):
        """Test that clear_panes inside a window definition is an unknown field."""
        with pytest.raises(DecodeError, match='unknown window field "clear_panes"'):
            decode("windows:\n  - w:\n      clear_panes: true\n")

    def test_second_unknown_key_pane_list(self):
        """Test the pane-list category under a later unknown key."""
        message = window_error({"dev": "vim", "extra": [{"a": 1}]})
        assert message == 'window field "extra" cannot be a pane list'

    def test_second_unknown_key_command_list(self):
        """Test the command-list category under a later unknown key."""
        message = window_error({"dev": "vim", "extra": ["ls"]})
        assert message == 'window field "extra" cannot be a command list'

    def test_second_unknown_key_definition(self):
        """Test the definition category under a later unknown key."""
        message = window_error({"dev": "vim", "extra": {"layout": "tiled"}})
        assert message == 'window field "extra" cannot be a window definition'

    def test_boolean_name(self):
        """Test that a boolean name is rejected."""
        assert window_error({"name": True}) == 'window field "name" cannot be a boolean'

    def test_numeric_layout(self):
        """Test that layout must be text."""
        assert window_error({"layout": 5}) == 'window field "layout" cannot be a number'

    def test_boolean_window(self):
        """Test that a boolean window is rejected."""
        assert window_error(True) == "invalid value for window: true"

    def test_name_with_number(self):
        """Test that a name followed by a number is rejected."""
        assert window_error({"dev": 5}) == 'window field "dev" cannot be a number'

    def test_unknown_field_in_definition(self):
        """Test that a name-prefixed definition is a closed map."""
        assert window_error({"dev": {"bogus": 1}}) == 'unknown window field "bogus"'

    def test_duplicate_field_in_definition(self):
        """Test that a field and its alias cannot both appear in a definition."""
        assert window_error({"dev": {"root": "/a", "working_dir": "/b"}}) == (
            'duplicate window field "working_dir"'
        )

    def test_pane_error_propagates(self):
        """Test that pane errors surface unchanged."""
        assert window_error({"panes": [{"clear": "x"}]}) == 'pane field "clear" cannot be a string'


class TestWindowConstruction:
    """Test building windows in code."""

    def test_from_commands(self):
        """Test that the command shortcut gives one escaped pane per command."""
        window = Window.from_commands("vim", "echo #")
        assert window.panes == [Pane(commands=["vim"]), Pane(commands=["echo ##"])]
        assert window.name is None
