from pi.console.cli import main

main()
