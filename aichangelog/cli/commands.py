"""CLI Commands - --display-config, --setup and --install-completion."""

import os
import sys
from dataclasses import asdict

from aichangelog import DEFAULT_CHANGELOG_PATH
from aichangelog.changelog import DEFAULT_TRIGGER_ENV
from aichangelog.config import CONFIG_FILENAME, Config, load_config, save_config, get_config_path
from aichangelog.output import bold, dim, info, print_success

ENV_OVERRIDES = ('AICHANGELOG_PROVIDER', 'AICHANGELOG_MODEL', 'AICHANGELOG_TIMEOUT')

# Shown for unset optional settings
UNSET_LABELS = {'model': 'provider default', 'timeout': 'provider default'}

PROVIDER_MENU = [
    ('gemini', "Gemini API (GEMINI_API_KEY)"),
    ('claude', "Claude API (ANTHROPIC_API_KEY)"),
    ('ollama', "Ollama (free, local)"),
    ('auto', "auto - first one available"),
]

COMPLETION_PROG = 'ai-changelog'


def display_config() -> int:
    config = load_config()
    source = get_config_path() or f"defaults (no {CONFIG_FILENAME} found)"

    print(f"\n{bold('Current Configuration')}\n")
    print(f"  {dim('Loaded from:')} {source}")

    active = [name for name in ENV_OVERRIDES if os.environ.get(name)]
    if active:
        print(f"  {dim('Environment overrides:')}")
        for name in active:
            print(f"    {name}={os.environ[name]}")

    settings = asdict(config)
    width = max(len(key) for key in settings) + 2
    print(f"\n  {bold('Settings:')}")
    for key, value in settings.items():
        shown = UNSET_LABELS.get(key, 'unset') if value is None else str(value)
        print(f"    {(key + ':').ljust(width)}{info(shown)}")

    print(f"\n  {dim('Config files, first found wins:')}")
    print(f"    ./{CONFIG_FILENAME}")
    print(f"    ~/{CONFIG_FILENAME}")
    print(f"\n  {dim('Run')} {COMPLETION_PROG} --setup {dim('to change them')}\n")
    return 0


def _ask(question: str, default: str | None = None) -> str | None:
    suffix = f" (Enter for {default})" if default else " (Enter for default)"
    return input(f"\n{question}{suffix}: ").strip() or default


def _choose_provider() -> str:
    print("Choose provider:\n")
    for number, (_, label) in enumerate(PROVIDER_MENU, start=1):
        print(f"  {number}. {label}")
    valid = {str(number): key for number, (key, _) in enumerate(PROVIDER_MENU, start=1)}
    while True:
        choice = input(f"\nSelect [{'/'.join(valid)}]: ").strip()
        if choice in valid:
            return valid[choice]


def run_setup() -> int:
    """Ask for each setting and save them to the global config file."""
    display_config()
    print(f"{bold('Setup Wizard')}\n")

    provider = _choose_provider()
    model = None
    if provider == 'ollama':
        print(dim("\nRecommended: llama3.2:3b, gemma3:4b, mistral:7b"))
    if provider != 'auto':
        model = _ask("Model")

    config = Config(
        provider=provider,
        model=model,
        changelog_path=_ask("Changelog file", DEFAULT_CHANGELOG_PATH),
        trigger_env=_ask("Release trigger variable", DEFAULT_TRIGGER_ENV),
    )
    print_success(f"Saved to {save_config(config, global_config=True)}")
    return 0


def _completion_instructions(shell: str) -> list[str]:
    register = f'eval "$(register-python-argcomplete {COMPLETION_PROG})"'
    for name, rc_file in (('zsh', '~/.zshrc'), ('bash', '~/.bashrc')):
        if name in shell:
            return [
                f"Add this line to {dim(rc_file)}:\n",
                f"  {register}\n",
                f"Then run: {dim('source ' + rc_file)}",
            ]
    if 'fish' in shell:
        return [f"  register-python-argcomplete --shell fish {COMPLETION_PROG} | source"]
    if sys.platform == 'win32':
        return [
            "For PowerShell, add this to your $PROFILE:\n",
            f"  register-python-argcomplete --shell powershell {COMPLETION_PROG} | Out-String | Invoke-Expression",
        ]
    return [f"  {dim('# Bash/Zsh')}", f"  {register}"]


def run_install_completion() -> int:
    print(f"\n{bold('Tab Completion Setup')}\n")
    for line in _completion_instructions(os.environ.get('SHELL', '')):
        print(line)
    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
