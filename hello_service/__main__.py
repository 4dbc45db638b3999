from hello_service.server import run

if __name__ == "__main__":
    run()
