# main.py
import sys, os
sys.path.append(os.path.dirname(__file__))  # 確保能找到 config.py

from utils.crashlog import setup_crashlog, log_exception, log_dir
setup_crashlog()

import argparse
from config import AppConfig, RenderConfig, StoreConfig
from notes.store import NoteStore
from app import App
import logging, traceback

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def _init_logging():
    logs = log_dir()
    log_path = os.path.join(logs, "app.log")

    if logging.getLogger().handlers:
        return

    logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, encoding="utf-8")
    try:
        from logging.handlers import RotatingFileHandler
        fh = RotatingFileHandler(log_path, maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(fh)
    except OSError:
        logging.warning("無法建立 log 檔 %s，只輸出到 console", log_path)

def parse_args(argv=None) -> AppConfig:
    ap = argparse.ArgumentParser(description="Chronos Plantacerium clock with per-hour notes")
    ap.add_argument('--notes-file', default=StoreConfig.notes_path)
    ap.add_argument('--fps', type=int, default=RenderConfig.fps)
    ap.add_argument('--scale', type=float, default=RenderConfig.face_scale)
    args = ap.parse_args(argv)
    return AppConfig(
        render=RenderConfig(face_scale=args.scale, fps=max(1, args.fps)),
        store=StoreConfig(notes_path=args.notes_file),
    )

def main():
    _init_logging()
    logging.info("應用程式啟動")

    cfg = parse_args()
    store = NoteStore.open(cfg.store.notes_path)
    App(cfg, store).run()

if __name__ == '__main__':
    try:
        main()
    except Exception as e:
        try:
            log_exception("Top-level exception", e)
        except OSError:
            pass
        logging.error("未捕捉的例外：%s", e, exc_info=True)
        print("程式發生錯誤，請到 logs/ 資料夾看 app.log 與 error-*.txt")
        traceback.print_exc()
