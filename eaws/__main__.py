#!/usr/bin/env python3
"""eaws - interactive helper for AWS ECS containers."""

from eaws.cli.main import main

if __name__ == "__main__":
    main()
