"""
Tests for the termforge command line interface.
"""

import pytest
from click.testing import CliRunner

from termforge import __version__
from termforge.cli import termforge
from termforge.config import config_manager
from termforge.library import ResourceLibrary, ResourceNotFoundError
from termforge.models import Profile
from termforge.profile_cli import generate_profile


def invoke(*args):
    return CliRunner().invoke(termforge, list(args))


class TestMainCommand:
    """Test the top-level command group."""

    def test_version(self):
        result = invoke("--version")

        assert result.exit_code == 0
        assert result.output == f"termforge {__version__}\n"

    def test_help_without_subcommand(self):
        result = invoke()

        assert result.exit_code == 0
        assert "package" in result.output
        assert "wezterm" in result.output

    def test_all_groups_registered(self):
        assert set(termforge.commands) == {
            "package",
            "prompt",
            "wezterm",
            "plugin",
            "shell",
            "profile",
            "palette",
            "config",
        }


class TestPackageCommands:
    """Test package list, get and install."""

    def test_list(self):
        result = invoke("package", "list")

        assert result.exit_code == 0
        assert "developer" in result.output
        assert "kubernetes" in result.output

    def test_list_filtered(self):
        result = invoke("package", "list", "--category", "nothing-here")

        assert result.exit_code == 0
        assert "No packages found" in result.output

    def test_get_shows_inherited_components(self):
        result = invoke("package", "get", "developer")

        assert result.exit_code == 0
        assert "zsh-syntax-highlighting" in result.output

    def test_get_raw(self):
        result = invoke("package", "get", "developer", "--raw")

        assert result.exit_code == 0
        assert "zsh-syntax-highlighting" not in result.output

    def test_install_dry_run(self):
        result = invoke("package", "install", "developer", "--dry-run")

        assert result.exit_code == 0
        assert result.output.startswith("Installing package: developer\n\n")
        assert "Plugins to install (4):" in result.output
        assert "  - zsh-syntax-highlighting (from core)" in result.output
        assert "  - fzf (from developer)" in result.output
        assert "Prompts to install (2):" in result.output
        assert "  - starship-minimal (from core)" in result.output
        assert "Profiles to install (2):" in result.output
        assert "without --dry-run to install." in result.output

    def test_install_writes_outputs(self, tmp_path):
        plugins_file = tmp_path / "out" / "plugins.zsh"
        starship_file = tmp_path / "out" / "starship.toml"
        config_manager.set_user_config_value("output.plugins", str(plugins_file))
        config_manager.set_user_config_value("output.starship", str(starship_file))

        result = invoke("package", "install", "developer")

        assert result.exit_code == 0
        assert "Package 'developer' installed - 8 components." in result.output
        assert "Run 'termforge profile generate developer'" in result.output
        assert "# zsh-autosuggestions" in plugins_file.read_text()
        assert "${theme." not in starship_file.read_text()

    def test_unknown_package(self):
        result = invoke("package", "install", "nope")

        assert result.exit_code == 1
        assert "package 'nope' not found" in result.output

    def test_broken_chain(self, tmp_path):
        resources = tmp_path / "resources"
        resources.mkdir()
        (resources / "orphan.yaml").write_text(
            "kind: TerminalPackage\nmetadata:\n  name: orphan\n"
            "spec:\n  extends: ghost\n  plugins: [fzf]\n"
        )
        config_manager.set_user_config_value("library.paths", [str(resources)])

        result = invoke("package", "install", "orphan", "--dry-run")

        assert result.exit_code == 1
        assert "ghost" in result.output


class TestPromptCommands:
    """Test prompt list and generate."""

    def test_list(self):
        result = invoke("prompt", "list")

        assert result.exit_code == 0
        assert "starship-minimal" in result.output

    def test_generate(self):
        result = invoke("prompt", "generate", "starship-minimal")

        assert result.exit_code == 0
        assert "[directory]" in result.output
        assert "${theme." not in result.output

    def test_generate_with_palette(self):
        result = invoke("prompt", "generate", "starship-minimal", "--palette", "gruvbox-dark")

        assert result.exit_code == 0
        assert "${theme." not in result.output

    def test_generate_to_file(self, tmp_path):
        target = tmp_path / "starship.toml"

        result = invoke("prompt", "generate", "starship-minimal", "-o", str(target))

        assert result.exit_code == 0
        assert f"Wrote {target}" in result.output
        assert "[character]" in target.read_text()

    def test_generate_from_file_strict(self, tmp_path):
        prompt_file = tmp_path / "prompt.yaml"
        prompt_file.write_text(
            "kind: TerminalPrompt\nmetadata:\n  name: custom\nspec:\n"
            "  type: starship\n  modules:\n    directory:\n"
            '      style: "${theme.primary} ${theme.neon}"\n'
        )

        relaxed = invoke("prompt", "generate", str(prompt_file))
        strict = invoke("prompt", "generate", str(prompt_file), "--strict")

        assert relaxed.exit_code == 0
        assert "${theme.neon}" in relaxed.output
        assert strict.exit_code == 1
        assert "unresolved theme placeholders with palette 'tokyonight': neon" in strict.output

    def test_unsupported_prompt_type(self, tmp_path):
        prompt_file = tmp_path / "p10k.yaml"
        prompt_file.write_text(
            "kind: TerminalPrompt\nmetadata:\n  name: p10k\nspec:\n  type: powerlevel10k\n"
        )

        result = invoke("prompt", "generate", str(prompt_file))

        assert result.exit_code == 1
        assert "powerlevel10k" in result.output

    def test_unknown_prompt(self):
        result = invoke("prompt", "generate", "nope")

        assert result.exit_code == 1
        assert "prompt 'nope' not found" in result.output


class TestWeztermCommands:
    """Test wezterm list, show and generate."""

    def test_list(self):
        result = invoke("wezterm", "list")

        assert result.exit_code == 0
        assert "tmux-style" in result.output

    def test_show(self):
        result = invoke("wezterm", "show", "default")

        assert result.exit_code == 0
        assert "tokyonight" in result.output

    def test_generate_uses_theme(self):
        result = invoke("wezterm", "generate", "default")

        assert result.exit_code == 0
        assert 'background = "#1a1b26",' in result.output
        assert result.output.endswith("return config\n")

    def test_generate_palette_override(self):
        result = invoke("wezterm", "generate", "default", "--palette", "catppuccin-mocha")

        assert result.exit_code == 0
        assert 'background = "#1a1b26",' not in result.output

    def test_missing_palette_option(self):
        result = invoke("wezterm", "generate", "default", "--palette", "nope")

        assert result.exit_code == 1
        assert "palette 'nope' not found" in result.output

    def test_missing_theme_is_a_warning(self, tmp_path):
        config_file = tmp_path / "wez.yaml"
        config_file.write_text(
            "kind: WeztermConfig\nmetadata:\n  name: wez\nspec:\n  themeRef: nope\n"
        )

        result = invoke("wezterm", "generate", str(config_file))

        assert result.exit_code == 0
        assert "theme 'nope' not resolved" in result.output
        assert "return config" in result.output


class TestPluginCommands:
    """Test plugin list and generate."""

    def test_list(self):
        result = invoke("plugin", "list", "--category", "kubernetes")

        assert result.exit_code == 0
        assert "kubectl" in result.output
        assert "fzf" not in result.output

    def test_generate_package_with_manager(self):
        result = invoke("plugin", "generate", "--package", "developer", "--manager", "zinit")

        assert result.exit_code == 0
        assert "zinit light zsh-users/zsh-autosuggestions" in result.output
        assert "zinit snippet OMZP::git" in result.output

    def test_generate_named(self):
        result = invoke("plugin", "generate", "git")

        assert result.output == "# git\nplugins+=(git)\n"

    def test_configured_manager(self):
        config_manager.set_user_config_value("defaults.plugin_manager", "antigen")

        result = invoke("plugin", "generate", "fzf")

        assert "antigen bundle junegunn/fzf" in result.output

    def test_invalid_manager(self):
        result = invoke("plugin", "generate", "fzf", "--manager", "zplug")

        assert result.exit_code == 2


class TestShellCommands:
    """Test shell list and generate."""

    def test_list(self):
        result = invoke("shell", "list", "--type", "fish")

        assert result.exit_code == 0
        assert "fish-default" in result.output
        assert "zsh-default" not in result.output

    def test_generate_default(self):
        result = invoke("shell", "generate")

        assert result.exit_code == 0
        assert result.output.startswith("# Environment\nexport EDITOR=nvim\n")

    def test_generate_configured_shell(self):
        config_manager.set_user_config_value("defaults.shell", "fish")

        result = invoke("shell", "generate")

        assert result.exit_code == 0
        assert "set -gx EDITOR nvim" in result.output


class TestProfileCommands:
    """Test profile list, show and generate."""

    def test_list(self):
        result = invoke("profile", "list")

        assert result.exit_code == 0
        assert "default" in result.output
        assert "developer" in result.output

    def test_show(self):
        result = invoke("profile", "show", "developer")

        assert result.exit_code == 0
        assert "TerminalProfile" in result.output
        assert "starship-developer" in result.output

    def test_generate_prints_each_section(self):
        result = invoke("profile", "generate", "default")

        assert result.exit_code == 0
        output = result.output
        assert output.startswith(
            "# Generated by termforge profile generate\n#\n# Profile: default\n"
        )
        starship = output.index("# === starship.toml ===")
        plugins = output.index("# === .zshrc (plugins) ===")
        shell = output.index("# === .zshrc (shell) ===")
        assert starship < plugins < shell
        assert "[character]" in output
        assert "# zsh-autosuggestions" in output
        assert "export EDITOR=nvim" in output
        assert "${theme." not in output

    def test_generate_with_manager(self):
        result = invoke("profile", "generate", "default", "--manager", "antigen")

        assert result.exit_code == 0
        assert "antigen bundle zsh-users/zsh-autosuggestions" in result.output

    def test_generate_to_directory(self, tmp_path):
        target = tmp_path / "out"

        result = invoke("profile", "generate", "developer", "-o", str(target))

        assert result.exit_code == 0
        assert f"Wrote {target / 'starship.toml'}" in result.output
        assert f"source {target / '.zshrc.termforge'}" in result.output
        assert 'palette = "tokyonight"' in (target / "starship.toml").read_text()
        rc = (target / ".zshrc.termforge").read_text()
        assert rc.startswith("# Generated by termforge - source this from your .zshrc\n")
        assert rc.index("# Plugins\n") < rc.index("# Shell config\n")
        assert "# fzf" in rc

    def test_dry_run_writes_nothing(self, tmp_path):
        target = tmp_path / "out"

        result = invoke("profile", "generate", "default", "-o", str(target), "--dry-run")

        assert result.exit_code == 0
        assert "# Would write to:" in result.output
        assert f"#   {target / '.zshrc.termforge'}" in result.output
        assert not target.exists()

    def test_empty_profile(self, tmp_path):
        profile_file = tmp_path / "profile.yaml"
        profile_file.write_text("kind: TerminalProfile\nmetadata:\n  name: bare\n")

        result = invoke("profile", "generate", str(profile_file))

        assert result.exit_code == 1
        assert "profile 'bare' references no prompt, plugins or shell" in result.output

    def test_missing_reference(self, tmp_path):
        profile_file = tmp_path / "profile.yaml"
        profile_file.write_text(
            "kind: TerminalProfile\nmetadata:\n  name: broken\n"
            "spec:\n  promptRef: starship-minimal\n  pluginRefs: [nope]\n"
        )

        result = invoke("profile", "generate", str(profile_file))

        assert result.exit_code == 1
        assert "plugin 'nope' not found" in result.output
        assert "# ===" not in result.output


class TestGenerateProfile:
    """Test rendering a profile against the built-in library."""

    @pytest.fixture(scope="class")
    def library(self):
        return ResourceLibrary()

    def test_theme_ref_picks_palette(self, library):
        profile = Profile(name="p", prompt_ref="starship-developer", theme_ref="gruvbox-dark")

        generated = generate_profile(profile, library)

        assert 'palette = "gruvbox-dark"' in generated.starship
        assert generated.files() == [("starship.toml", generated.starship)]

    def test_palette_overrides_theme_ref(self, library):
        profile = Profile(name="p", prompt_ref="starship-developer", theme_ref="gruvbox-dark")

        generated = generate_profile(profile, library, palette_name="catppuccin-mocha")

        assert 'palette = "catppuccin-mocha"' in generated.starship

    def test_shell_type_names_rc_file(self, library):
        generated = generate_profile(Profile(name="p", shell_ref="bash-default"), library)

        assert generated.starship == ""
        assert generated.rc_file == ".bashrc.termforge"
        assert "# Plugins" not in generated.rc_content()
        assert "# Shell config\n" in generated.rc_content()

    def test_missing_shell(self, library):
        with pytest.raises(ResourceNotFoundError, match="shell 'nope' not found"):
            generate_profile(Profile(name="p", shell_ref="nope"), library)


class TestPaletteCommands:
    """Test palette list and show."""

    def test_list(self):
        result = invoke("palette", "list")

        assert result.exit_code == 0
        assert "gruvbox-dark" in result.output

    def test_show_default(self):
        result = invoke("palette", "show")

        assert result.exit_code == 0
        assert "tokyonight" in result.output
        assert "#1a1b26" in result.output

    def test_show_terminal(self):
        result = invoke("palette", "show", "tokyonight", "--terminal")

        assert result.exit_code == 0
        assert "ansi_red" in result.output


class TestConfigCommands:
    """Test config get, set, files and init."""

    def test_set_and_get(self):
        result = invoke("config", "set", "defaults.palette", "gruvbox-dark")

        assert result.exit_code == 0
        assert "Set defaults.palette = gruvbox-dark (user config)" in result.output
        assert invoke("config", "get", "defaults.palette").output == "gruvbox-dark\n"

    def test_set_parses_types(self):
        invoke("config", "set", "verbosity", "2")

        assert config_manager.get_config_value("verbosity") == 2

    def test_get_missing(self):
        result = invoke("config", "get", "defaults.nope")

        assert result.exit_code == 1
        assert "Configuration key 'defaults.nope' not found" in result.output

    def test_list_section(self):
        result = invoke("config", "list", "output")

        assert result.exit_code == 0
        assert "starship" in result.output

    def test_files(self):
        result = invoke("config", "files")

        assert result.exit_code == 0
        assert "Configuration Files" in result.output
        assert "Missing" in result.output

    def test_init(self, isolated_config):
        result = invoke("config", "init")

        assert result.exit_code == 0
        assert (isolated_config / "config" / "termforge" / "config.yaml").exists()
        assert invoke("config", "init").exit_code == 1
        assert invoke("config", "init", "--force").exit_code == 0
