from todolist_service.main import main

main()
