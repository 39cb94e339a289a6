from relscout.cli import main

main()
