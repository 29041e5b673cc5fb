"""punycode label decoder"""

from punydecode.main import app

if __name__ == "__main__":
    app()
