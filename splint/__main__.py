from splint.entrypoints.cli import main

main()
