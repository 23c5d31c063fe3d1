from placez.main import main

main()
