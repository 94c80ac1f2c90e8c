from tartil.cli import main

raise SystemExit(main())
