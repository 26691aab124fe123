"""
contentmodel core: typed models, discriminator dispatch, and codecs.
"""
