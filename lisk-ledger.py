#! /usr/bin/env python3

# Lisk Ledger interaction script

if __name__ == '__main__':
    from lisklib._cli import main
    main()
else:
    raise ImportError('lisk-ledger is not importable. Import lisklib instead')
