"""
Сборщик FolderAtlas в exe
"""
import os
import shutil
import subprocess
import sys

APP_NAME = 'FolderAtlas'

def build():
    print("Очистка старых сборок...")
    for folder in ['build', 'dist']:
        if os.path.exists(folder):
            shutil.rmtree(folder)

    print("Сборка exe...")

    sep = ';' if sys.platform.startswith('win') else ':'
    cmd = [
        'pyinstaller',
        '--onefile',
        '--windowed',
        '--name', APP_NAME,
        '--add-data', f'folderatlas{sep}folderatlas',
        '--hidden-import', 'PySide6',
        '--hidden-import', 'psutil',
        'main.py'
    ]

    result = subprocess.run(cmd, capture_output=True, text=True)

    if result.returncode != 0:
        print("Ошибка сборки:")
        print(result.stderr)
        sys.exit(1)

    exe_name = APP_NAME + ('.exe' if sys.platform.startswith('win') else '')
    exe_src = os.path.join('dist', exe_name)
    print(f"Сборка завершена: {exe_src}")

    release_dir = 'release'
    os.makedirs(release_dir, exist_ok=True)
    shutil.copy(exe_src, os.path.join(release_dir, exe_name))
    for extra in ('README.md', 'DESIGN.md'):
        if os.path.exists(extra):
            shutil.copy(extra, os.path.join(release_dir, extra))

    print(f"Релиз собран в папке: {release_dir}/")

if __name__ == '__main__':
    build()
