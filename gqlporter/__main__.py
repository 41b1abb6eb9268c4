from gqlporter.cli.main import main

main()
