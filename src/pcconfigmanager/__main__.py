from pcconfigmanager.cli import main

raise SystemExit(main())
