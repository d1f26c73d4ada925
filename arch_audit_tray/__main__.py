from arch_audit_tray.main import main

raise SystemExit(main())
