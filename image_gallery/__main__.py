import sys

from image_gallery.workbench import main

sys.exit(main())
