from autorelease.cli import main

main()
