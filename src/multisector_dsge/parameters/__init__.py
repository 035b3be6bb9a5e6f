"""パラメータ管理"""
