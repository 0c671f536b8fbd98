import logging
import os
import sys
from pathlib import Path

from PyQt5.QtWidgets import QApplication

from RC_Libs.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR
from RC_Libs.ImageEditingLib.redact_editor_window import RedactEditorWindow


def main() -> None:
    logging.basicConfig(
        level=os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    image_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    window = RedactEditorWindow(image_path)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
