"""CHIP-8インタプリタ: マシン状態、命令セット、ステップ駆動、PySide6フロントエンド。"""
