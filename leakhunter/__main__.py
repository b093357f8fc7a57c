"""Allow running LeakHunter as ``python -m leakhunter``."""

if __name__ == "__main__":
    from leakhunter.cli import main
    main()
