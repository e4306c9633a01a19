from tlhmorph.cli import main

main()
