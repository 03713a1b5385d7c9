from swintegrity.cli.app import main

main()
