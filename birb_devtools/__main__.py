from birb_devtools.cli import main

raise SystemExit(main())
