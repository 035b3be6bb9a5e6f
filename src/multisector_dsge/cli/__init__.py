"""コマンドラインインターフェース"""
