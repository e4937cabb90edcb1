from rdb_autoresize.autoresizer import main

main()
