from harmonic_garden.cli import main

main()
