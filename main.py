# Run favicon-gen from a checkout without installing it.
from favicon_gen.orchestrator import main

if __name__ == '__main__':
    raise SystemExit(main())
