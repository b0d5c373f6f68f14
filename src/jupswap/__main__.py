from jupswap.main import main

main()
