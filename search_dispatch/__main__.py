from search_dispatch.cli.app import main

raise SystemExit(main())
