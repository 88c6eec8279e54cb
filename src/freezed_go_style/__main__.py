from freezed_go_style.main import main

main()
