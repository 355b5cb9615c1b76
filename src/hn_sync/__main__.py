from hn_sync.cli.main import main

main()
