from install_texlive.main import main

main()
