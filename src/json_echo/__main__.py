from json_echo.core.cli import main

if __name__ == "__main__":
    main()
