"""CLI Commands"""

import os
import sys

from changelog_gen.config import ENV_OVERRIDES, load_config, get_config_path
from changelog_gen.engine import build_registry
from changelog_gen.output import bold, dim, info


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .changelogrc found)")

    env_set = [var for var in ENV_OVERRIDES if os.environ.get(var)]
    if env_set:
        print(f"  {dim('Environment overrides:')}")
        for var in env_set:
            print(f"    {var}={os.environ[var]}")

    print()
    print(f"  {bold('Settings:')}")
    for key, value in config.to_dict().items():
        shown = str(value).lower() if isinstance(value, bool) else (value or '""')
        print(f"    {key + ':':<19}{info(str(shown))}")

    print(f"\n  {bold('Types:')}")
    registry = build_registry(config.custom_emoji)
    print("    " + "  ".join(f"{emoji} {keyword}" for keyword, emoji in registry.items()))

    print(f"\n  {dim('Config locations:')}")
    print("    Local:  .changelogrc (in current directory)")
    print("    Global: ~/.changelogrc\n")

    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')
    line = 'eval "$(register-python-argcomplete changelog-gen)"'

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell changelog-gen | Out-String | Invoke-Expression")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish changelog-gen | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
