from duplex_clients.cli import run

if __name__ == '__main__':
    run()
