from phasegen.cli import main

main()
