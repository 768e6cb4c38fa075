from interview_scoring.app import main

raise SystemExit(main())
