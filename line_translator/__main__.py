from line_translator.cli import main

main()
