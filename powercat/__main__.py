from powercat.cat import main

main()
