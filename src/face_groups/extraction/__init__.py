"""Face crop extraction: padded crop geometry and the image cropper."""
