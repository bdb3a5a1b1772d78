from tutorial.main import main

raise SystemExit(main())
