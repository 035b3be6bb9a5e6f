"""モデル本体・変換・定常状態ソルバー"""
