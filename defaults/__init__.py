"""
默认配置模块包
"""
