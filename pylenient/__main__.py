from pylenient.main import main

raise SystemExit(main())
