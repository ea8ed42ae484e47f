"""install-tl profile generation."""

from pathlib import Path


def get_profile(home_dir: Path) -> str:
    """Return an install-tl profile that installs the bare infrastructure below home_dir."""
    home = home_dir.as_posix()
    return f"""selected_scheme scheme-infraonly
TEXDIR {home}/texlive
TEXMFCONFIG {home}/.texlive/texmf-config
TEXMFHOME {home}/texmf
TEXMFLOCAL {home}/texlive/texmf-local
TEXMFSYSCONFIG {home}/texlive/texmf-config
TEXMFSYSVAR {home}/texlive/texmf-var
TEXMFVAR {home}/.texlive/texmf-var
option_doc 0
option_src 0
"""
