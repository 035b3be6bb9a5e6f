"""推定の補助機能

事前分布（priors）と、サンプラー向けのパラメータベクトル変換（parameter_mapping）を提供する。
"""
