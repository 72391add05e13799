"""Built-in layout scripts written by ``uzzy --init``.

Each script receives ``$1`` project path, ``$2`` session name and
``$3`` project display name.
"""

from __future__ import annotations

NVIM_CLAUDE = """#!/usr/bin/env bash
# Layout: nvim-claude
# Two windows: neovim and claude

set -euo pipefail

PROJECT_PATH="$1"
SESSION_NAME="$2"

tmux new-session -d -s "$SESSION_NAME" -c "$PROJECT_PATH" -n editor
tmux send-keys -t "$SESSION_NAME:editor" 'nvim' C-m

tmux new-window -t "$SESSION_NAME" -n claude -c "$PROJECT_PATH"
tmux send-keys -t "$SESSION_NAME:claude" 'claude' C-m

tmux select-window -t "$SESSION_NAME:editor"
"""

NVIM_ONLY = """#!/usr/bin/env bash
# Layout: nvim-only
# Single window with neovim

set -euo pipefail

PROJECT_PATH="$1"
SESSION_NAME="$2"

tmux new-session -d -s "$SESSION_NAME" -c "$PROJECT_PATH" -n editor
tmux send-keys -t "$SESSION_NAME:editor" 'nvim' C-m
"""

SPLIT_DEV = """#!/usr/bin/env bash
# Layout: split-dev
# Editor on the left (70%), shell on the right (30%)

set -euo pipefail

PROJECT_PATH="$1"
SESSION_NAME="$2"

tmux new-session -d -s "$SESSION_NAME" -c "$PROJECT_PATH" -n dev
tmux send-keys -t "$SESSION_NAME:dev" 'nvim' C-m
tmux split-window -h -t "$SESSION_NAME:dev" -c "$PROJECT_PATH" -p 30
tmux select-pane -t "$SESSION_NAME:dev.0"
"""

TERMINAL = """#!/usr/bin/env bash
# Layout: terminal
# Plain shell, no editor

set -euo pipefail

PROJECT_PATH="$1"
SESSION_NAME="$2"

tmux new-session -d -s "$SESSION_NAME" -c "$PROJECT_PATH"
"""

DEFAULT_LAYOUT_SCRIPTS: dict[str, str] = {
    "nvim-claude": NVIM_CLAUDE,
    "nvim-only": NVIM_ONLY,
    "split-dev": SPLIT_DEV,
    "terminal": TERMINAL,
}
