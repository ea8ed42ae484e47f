"""Services for install-texlive."""
