"""
Tests for option values and resource document loading.
"""

import pytest

from termforge.models import (
    Bool,
    Number,
    Package,
    Plugin,
    Profile,
    PromptDefinition,
    ResourceLoadError,
    Scalar,
    ShellDefinition,
    Table,
    ValueList,
    WezTermConfig,
    load_document,
    load_documents,
    load_file,
    parse_option,
)
from termforge.models.options import to_python
from termforge.palette.palette import Palette


def document(kind, name="example", **spec):
    return {
        "apiVersion": "devopsmaestro.io/v1",
        "kind": kind,
        "metadata": {"name": name},
        "spec": spec,
    }


class TestParseOption:
    """Test conversion of raw YAML values to option values."""

    def test_bool_before_number(self):
        assert parse_option(True) == Bool(True)
        assert parse_option(0) == Number(0)

    def test_scalars(self):
        assert parse_option("bold red") == Scalar("bold red")
        assert parse_option(None) == Scalar("")
        assert parse_option(12.5) == Number(12.5)

    def test_list(self):
        assert parse_option(["py", 3]) == ValueList((Scalar("py"), Number(3)))

    def test_symbols_table_is_labelled(self):
        value = parse_option({"macos": " ", "ubuntu": " "}, key="symbols")

        assert isinstance(value, Table)
        assert value.labels

    def test_other_tables_are_not_labelled(self):
        assert not parse_option({"a": "b"}, key="substitutions").labels
        # A symbols table with non-string values is a plain table
        assert not parse_option({"a": 1}, key="symbols").labels

    def test_number_is_integral(self):
        assert Number(12.0).is_integral
        assert Number(3).is_integral
        assert not Number(12.5).is_integral

    def test_to_python(self):
        raw = {"a": [1, "x", True], "b": {"c": 2.5}}

        assert to_python(parse_option(raw)) == raw


class TestLoadDocument:
    """Test document validation and model construction."""

    def test_missing_kind(self):
        with pytest.raises(ResourceLoadError, match="missing kind"):
            load_document({"metadata": {"name": "x"}})

    def test_unknown_kind(self):
        with pytest.raises(ResourceLoadError, match="unknown kind: Nope"):
            load_document(document("Nope"))

    def test_missing_name(self):
        with pytest.raises(ResourceLoadError, match="missing metadata.name"):
            load_document({"kind": "TerminalPackage", "metadata": {}})

    def test_not_a_mapping(self):
        with pytest.raises(ResourceLoadError, match="must be a mapping"):
            load_document(["kind", "TerminalPackage"])

    def test_package(self):
        package = load_document(
            document(
                "TerminalPackage",
                name="developer",
                extends="core",
                plugins=["fzf", "git"],
                prompts="starship-developer",
            )
        )

        assert isinstance(package, Package)
        assert package.extends == "core"
        assert package.plugins == ("fzf", "git")
        # A single string is accepted where a list is expected
        assert package.prompts == ("starship-developer",)
        assert package.enabled

    def test_package_round_trip(self):
        data = document("TerminalPackage", name="core", plugins=["a", "b"])
        data["metadata"]["description"] = "Core"

        assert load_document(data).to_document() == data

    def test_plugin_requires_source(self):
        with pytest.raises(ResourceLoadError, match="must specify repo, source, or ohmyzshPlugin"):
            load_document(document("TerminalPlugin", description="nothing"))

    def test_plugin_invalid_manager(self):
        with pytest.raises(ResourceLoadError, match="invalid manager: zplug"):
            load_document(document("TerminalPlugin", repo="a/b", manager="zplug"))

    def test_plugin_invalid_load_mode(self):
        with pytest.raises(ResourceLoadError, match="invalid loadMode: later"):
            load_document(document("TerminalPlugin", repo="a/b", loadMode="later"))

    def test_plugin_defaults(self):
        plugin = load_document(
            document(
                "TerminalPlugin",
                name="fzf",
                repo="junegunn/fzf",
                sourceFiles=["shell/key-bindings.zsh"],
                env={"FZF_DEFAULT_OPTS": "--height 40%"},
            )
        )

        assert isinstance(plugin, Plugin)
        assert plugin.manager == "manual"
        assert plugin.load_mode == "immediate"
        assert plugin.source_files == ("shell/key-bindings.zsh",)
        assert plugin.env == {"FZF_DEFAULT_OPTS": "--height 40%"}
        assert plugin.source_url() == "https://github.com/junegunn/fzf"

    def test_prompt_requires_type(self):
        with pytest.raises(ResourceLoadError, match="missing spec.type"):
            load_document(document("TerminalPrompt"))

    def test_prompt_invalid_type(self):
        with pytest.raises(ResourceLoadError, match="invalid type: pure"):
            load_document(document("TerminalPrompt", type="pure"))

    def test_prompt_modules(self):
        prompt = load_document(
            document(
                "TerminalPrompt",
                type="starship",
                paletteRef="tokyonight",
                modules={
                    "directory": {
                        "style": "bold ${theme.primary}",
                        "truncation_length": 3,
                        "options": {"truncate_to_repo": True},
                    },
                    "os": {"symbols": {"Macos": " "}},
                },
                character={"success_symbol": "[❯](green)"},
            )
        )

        assert isinstance(prompt, PromptDefinition)
        assert prompt.palette_ref == "tokyonight"
        directory = prompt.modules["directory"]
        assert directory.style == "bold ${theme.primary}"
        # Unknown keys and the options mapping both become options
        assert directory.options == {
            "truncate_to_repo": Bool(True),
            "truncation_length": Number(3),
        }
        assert prompt.modules["os"].options["symbols"].labels
        assert dict(prompt.character.items()) == {"success_symbol": "[❯](green)"}

    def test_prompt_option_cannot_shadow_module_field(self):
        with pytest.raises(ResourceLoadError, match="set style on the module itself"):
            load_document(
                document(
                    "TerminalPrompt",
                    type="starship",
                    modules={"directory": {"style": "bold", "options": {"style": "red"}}},
                )
            )

    def test_shell_requires_type(self):
        with pytest.raises(ResourceLoadError, match="missing spec.shellType"):
            load_document(document("TerminalShell"))

    def test_shell_invalid_type(self):
        with pytest.raises(ResourceLoadError, match="invalid shellType: tcsh"):
            load_document(document("TerminalShell", shellType="tcsh"))

    def test_shell(self):
        shell = load_document(
            document(
                "TerminalShell",
                shellType="zsh",
                env=[{"name": "EDITOR", "value": "nvim"}],
                aliases=[{"name": "G", "command": "| grep", "global": True}],
                history={"size": 1000, "ignore_dups": True},
            )
        )

        assert isinstance(shell, ShellDefinition)
        assert shell.env[0].name == "EDITOR"
        assert shell.aliases[0].global_alias
        assert shell.history.size == 1000
        assert shell.history.ignore_dups

    def test_wezterm(self):
        config = load_document(
            {
                "apiVersion": "devopsmaestro.dev/v1alpha1",
                "kind": "WeztermConfig",
                "metadata": {"name": "work"},
                "spec": {
                    "window": {"opacity": 0.9, "paddingLeft": 4},
                    "themeRef": "tokyonight",
                    "leader": {"key": "a", "mods": "CTRL", "timeout": 1000},
                    "keys": [
                        {"key": "t", "mods": "CMD", "action": "SpawnTab", "args": "CurrentPaneDomain"},
                        {"key": "z", "action": "TogglePaneZoomState"},
                    ],
                    "keyTables": {"resize": [{"key": "h", "action": "AdjustPaneSize", "args": ["Left", 1]}]},
                },
            }
        )

        assert isinstance(config, WezTermConfig)
        # Font defaults apply when no font is given
        assert config.font.family == "MesloLGS Nerd Font Mono"
        assert config.font.size == 14
        assert config.window.opacity == 0.9
        assert config.window.padding_left == 4
        assert config.theme_ref == "tokyonight"
        assert config.leader.timeout == 1000
        assert config.keys[0].args == Scalar("CurrentPaneDomain")
        assert config.keys[1].args is None
        assert config.key_tables["resize"][0].args == ValueList((Scalar("Left"), Number(1)))

    def test_profile(self):
        profile = load_document(
            document(
                "TerminalProfile",
                name="work",
                promptRef="starship-developer",
                pluginRefs="fzf",
                shellRef="zsh-default",
                themeRef="gruvbox-dark",
            )
        )

        assert isinstance(profile, Profile)
        assert profile.prompt_ref == "starship-developer"
        assert profile.plugin_refs == ("fzf",)
        assert profile.shell_ref == "zsh-default"
        assert profile.theme_ref == "gruvbox-dark"
        assert not profile.is_empty

    def test_profile_round_trip(self):
        data = document(
            "TerminalProfile", name="work", promptRef="starship-minimal", pluginRefs=["a", "b"]
        )
        data["metadata"]["tags"] = ["zsh"]

        assert load_document(data).to_document() == data

    def test_empty_profile(self):
        assert load_document(document("TerminalProfile")).is_empty

    def test_keybinding_requires_key(self):
        with pytest.raises(ResourceLoadError, match=r"spec\.keys\[1\]: missing key"):
            load_document(
                document(
                    "WeztermConfig",
                    keys=[{"key": "z", "action": "TogglePaneZoomState"}, {"action": "SpawnTab"}],
                )
            )

    @pytest.mark.parametrize("action", [None, "", "SpawnTab()"])
    def test_keybinding_requires_action_name(self, action):
        with pytest.raises(ResourceLoadError, match="action must be a WezTerm action name"):
            load_document(
                document("WeztermConfig", keyTables={"resize": [{"key": "h", "action": action}]})
            )

    def test_palette(self):
        palette = load_document(document("Palette", name="mine", colors={"bg": "#000000"}))

        assert isinstance(palette, Palette)
        assert palette.get("bg") == "#000000"

    def test_invalid_palette(self):
        with pytest.raises(ResourceLoadError, match="invalid color format"):
            load_document(document("Palette", name="mine", colors={"bg": "black"}))

    def test_type_errors_are_wrapped(self):
        with pytest.raises(ResourceLoadError, match="invalid TerminalPlugin 'example'"):
            load_document(document("TerminalPlugin", repo="a/b", priority="high"))


class TestLoadDocuments:
    """Test multi-document YAML streams and files."""

    def test_multiple_documents(self):
        text = """
apiVersion: devopsmaestro.io/v1
kind: TerminalPackage
metadata:
  name: core
spec:
  plugins: [zsh-autosuggestions]
---
apiVersion: devopsmaestro.io/v1
kind: TerminalPackage
metadata:
  name: developer
spec:
  extends: core
  plugins: [fzf]
"""
        resources = load_documents(text)

        assert [r.name for r in resources] == ["core", "developer"]

    def test_empty_documents_are_skipped(self):
        assert load_documents("---\n---\n") == []

    def test_invalid_yaml(self):
        with pytest.raises(ResourceLoadError, match="failed to parse YAML"):
            load_documents("kind: [unclosed")

    def test_load_file_names_the_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("kind: Nope\nmetadata:\n  name: x\n")

        with pytest.raises(ResourceLoadError, match="bad.yaml"):
            load_file(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ResourceLoadError, match="failed to read"):
            load_file(tmp_path / "missing.yaml")
