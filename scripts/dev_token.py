#!/usr/bin/env python3
"""
Print a development bearer token:  python scripts/dev_token.py <uid> [email]
"""
import sys
from studymate.api.auth import create_access_token

def main():
    if len(sys.argv) < 2:
        print("usage: dev_token.py <uid> [email]")
        sys.exit(1)
    uid = sys.argv[1]
    email = sys.argv[2] if len(sys.argv) > 2 else None
    print(create_access_token(uid, email=email))

if __name__ == "__main__":
    main()
